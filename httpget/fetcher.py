"""
One-shot HTTP GET: print the status code and stream the body to stdout
"""

import logging
import sys
from typing import BinaryIO, Optional

import httpx

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Any failure opening, sending, reading or copying the HTTP exchange."""

    def __init__(self, url: str, message: str):
        super().__init__(f"GET {url} failed: {message}")
        self.url = url


class HTTPFetcher:
    def __init__(
        self,
        follow_redirects: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
        out: Optional[BinaryIO] = None
    ):
        """Initialize the fetcher.

        Args:
            follow_redirects: Follow 3xx responses and report the final status.
            transport: httpx transport override, None for the network.
            out: Binary stream receiving the trace lines and body.
                 Defaults to the process's stdout.
        """
        self.follow_redirects = follow_redirects
        self.transport = transport
        self.out = out

    def fetch(self, url: str) -> int:
        """GET the url, copy the body to the output stream and return the status code."""
        out = self.out if self.out is not None else sys.stdout.buffer

        logger.debug(f"Opening connection for {url}")
        try:
            # argv may carry undecodable bytes as surrogates; echo them back unchanged.
            out.write(f"GET {url}\n".encode(errors="surrogateescape"))
            out.flush()

            # No timeout: a hung server hangs the caller.
            with httpx.Client(
                transport=self.transport,
                follow_redirects=self.follow_redirects,
                timeout=None
            ) as client:
                with client.stream("GET", url) as response:
                    out.write(f"Response Code: {response.status_code}\n".encode())

                    # Chunks are written as they arrive.
                    copied = 0
                    for chunk in response.iter_bytes():
                        out.write(chunk)
                        copied += len(chunk)
                    out.flush()

        except (httpx.HTTPError, httpx.InvalidURL, OSError, UnicodeError) as e:
            raise TransportError(url, f"{type(e).__name__}: {e}") from e

        logger.debug(f"Copied {copied} bytes from {response.url} (status: {response.status_code})")
        return response.status_code

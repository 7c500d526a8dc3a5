import httpx
import pytest


ENV_VARS = ('LOG_LEVEL', 'LOG_FORMAT', 'HTTPGET_FOLLOW_REDIRECTS')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TrackingStream(httpx.SyncByteStream):
    """Response body that records close() and can fail part way through."""

    def __init__(self, chunks, fail_after=None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.closed = False

    def __iter__(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise httpx.ReadError("connection reset by peer")
            yield chunk

    def close(self):
        self.closed = True


def serve(status_code=200, content=b""):
    """MockTransport answering every request with the same response."""
    def handler(request):
        return httpx.Response(status_code, content=content)
    return httpx.MockTransport(handler)

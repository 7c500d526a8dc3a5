"""
Entrypoint: run httpget from a source checkout, e.g. `python main.py https://example.com/`
"""

from httpget.main import main


if __name__ == "__main__":
    main()

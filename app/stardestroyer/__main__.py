"""Allow running stardestroyer as ``python -m stardestroyer``."""

from stardestroyer.cli.main import app

if __name__ == "__main__":
    app()

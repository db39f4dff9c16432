"""Allow running backpick as ``python -m backpick``."""

from backpick.cli.main import app

if __name__ == "__main__":
    app()

"""Allow `python -m trackbridge`."""

from trackbridge.cli.app import run


if __name__ == "__main__":
    run()

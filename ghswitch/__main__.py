"""Allow `python -m ghswitch`."""

from .presentation.cli import cli

if __name__ == "__main__":
    cli()

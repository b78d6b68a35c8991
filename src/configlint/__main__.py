"""Entry point for ``python -m configlint``."""

from configlint.cli.main import cli

if __name__ == "__main__":
    cli()

"""Entry point for the Atomize CLI.

Usage:
    python -m atomize.interfaces.cli.main

Or via installed entry point:
    atomize <command>
"""

from atomize.interfaces.cli import app


def main() -> None:
    """Run the Atomize CLI application."""
    app()


if __name__ == "__main__":
    main()

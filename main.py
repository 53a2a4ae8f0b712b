"""Main entry point for the quizbust CLI."""

from quizbust.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()

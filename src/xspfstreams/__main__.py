"""Main entry point for xspf-streams."""

from .cli import app


def main():
    """Run the command-line interface."""
    app()


if __name__ == "__main__":
    main()

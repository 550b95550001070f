"""Main entry point for the mathlab package."""

from mathlab.inventory.cli import app


def main():
    """Run the inventory command-line interface."""
    app()


if __name__ == "__main__":
    main()

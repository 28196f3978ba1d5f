"""Main entry point for the spring_tally package."""
from spring_tally.cli import cli


def main():
    """Main entry point function."""
    cli()


if __name__ == "__main__":
    main()

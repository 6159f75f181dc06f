# slurp/main.py
"""Main entry point for the slurp CLI application."""

from slurp.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="slurp")

if __name__ == '__main__':
    entrypoint()

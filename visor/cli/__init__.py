"""Command-line interface built with typer and rich."""

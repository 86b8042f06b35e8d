"""Entry point for running forgepr as a module.

Allows running the application with:
    python -m forgepr

This delegates to the Typer CLI app.
"""

from forgepr.cli import app

if __name__ == "__main__":
    app()

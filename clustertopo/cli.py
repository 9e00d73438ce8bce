import logging
import sys

import typer

from clustertopo.commands import topology
from clustertopo.config import Config
from clustertopo.logging import setup_logger

app = typer.Typer(help="Multi-cluster topology resolver.")

# Global debug flag
debug_mode = False

# Configure logging
def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure package logging based on debug mode."""
    level = logging.DEBUG if debug else None
    return setup_logger("clustertopo", level)

# Add all command groups
app.add_typer(topology.app, name="topology")

# Global options callback
@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """clustertopo - multi-cluster topology resolver."""
    global debug_mode
    debug_mode = debug
    logger = setup_logging(debug)
    if debug:
        logger.debug("Debug mode enabled")
    Config.validate()

if __name__ == "__main__":
    try:
        app()
    except Exception as e:
        if debug_mode:
            import traceback
            logging.error(f"Unhandled exception: {e}\n{traceback.format_exc()}")
        else:
            logging.error(f"Error: {e}")
        sys.exit(1)

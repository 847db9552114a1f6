# scramble/__init__.py
import os
from loguru import logger

__version__ = "0.1.0"

def _initialize_digests():
    """Loads digest plugins unless explicitly skipped."""
    if os.environ.get("SCRAMBLE_SKIP_PLUGINS", "0") == "1":
        logger.debug("Skipping digest plugin loading due to SCRAMBLE_SKIP_PLUGINS=1.")
        return

    try:
        from .core.digests import load_digests
        load_digests() # Discover and register digests from entry points
    except Exception:
        logger.exception("An unexpected error occurred during digest plugin loading.")

_initialize_digests()

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from safe_lib.config import load_settings


def configure_logging(config_path: Optional[Path | str] = None) -> logging.Logger:
    """Configure root logging for the application.

    Called by `bootstrap(setup_logging=True)`, or directly by a host that
    configures logging before building its runtime.

    Reads `log_level` from the YAML settings file and reconfigures the root
    logger with it. An unreadable settings file or an unknown level falls
    back to WARNING. Returns a module logger for the caller.
    """
    level = logging.WARNING
    try:
        name = load_settings(config_path).log_level
        if name:
            level = getattr(logging, str(name).upper())
    except (ValueError, AttributeError):
        # If config parse fails, fall back to default level
        level = logging.WARNING

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)
    logger.info("Log level set to %s", logging.getLevelName(level))

    return logger

"""Application log file setup."""

import logging
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_log_path() -> Path:
    """Return the path to the application log file."""
    log_dir = Path.home() / ".memegenius" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "memegenius.log"


def setup_logging(level: int = logging.INFO, log_path: Path | None = None) -> logging.Logger:
    """Attach a file handler to the ``src`` logger tree (idempotent)."""
    logger = logging.getLogger("src")
    logger.setLevel(level)

    # Add file handler if not already present
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        fh = logging.FileHandler(log_path or get_log_path(), encoding="utf-8")
        fh.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(fh)
    return logger

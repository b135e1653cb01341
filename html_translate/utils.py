from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logger(
    log_dir: Optional[str | Path] = None,
    name: str = "html-translate",
    level: int = logging.INFO,
) -> logging.Logger:
    """Create a console logger, plus a file handler when ``log_dir`` is given."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding multiple handlers (e.g., repeated CLI calls in one process)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    fmt = logging.Formatter(LOG_FORMAT)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger


def sha1_text(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()

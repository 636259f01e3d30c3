# micro_aad/utils/logger.py
import logging
import sys
from pathlib import Path


def get_logger(name=__name__, level=None, logfile=None):
    """
    Return a logger writing to stdout (and to `logfile` when given).

    Loggers below "micro_aad" (e.g. "micro_aad.core.engine") get no handlers
    of their own and propagate to the package logger, which is configured once
    with the level from EngineConfig.
    """
    logger = logging.getLogger(name)
    root_name = name.split(".")[0]
    if root_name == "micro_aad" and name != "micro_aad":
        get_logger("micro_aad")
        if level is not None:
            logger.setLevel(level)
        return logger

    if logger.handlers:
        return logger  # already configured

    if level is None:
        from ..config import get_config
        level = get_config().log_level
    logger.setLevel(level)
    fmt = logging.Formatter(fmt="%(asctime)s | %(levelname)7s | %(name)s | %(message)s",
                            datefmt="%Y-%m-%d %H:%M:%S")

    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt)
    logger.addHandler(sh)
    # Handled here; do not repeat through handlers on the root logger.
    logger.propagate = False

    if logfile:
        log_dir = Path(logfile).parent
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(logfile)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger

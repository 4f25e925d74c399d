import logging
import os
from logging.handlers import TimedRotatingFileHandler


def get_base_log_dir():
    """APP_LOG_DIR, defaulting to <repo>/storage/logs."""
    return os.environ.get("APP_LOG_DIR") or os.path.abspath(
        os.path.join(os.path.dirname(__file__), "..", "..", "storage", "logs")
    )


def _build_logger(name):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(os.environ.get("APP_LOG_LEVEL", "DEBUG").upper())
    formatter = logging.Formatter("%(asctime)s %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler()]

    # APP_LOG_TO_FILE=false keeps logs on the console only (containers, tests)
    if os.environ.get("APP_LOG_TO_FILE", "true").lower() != "false":
        log_dir = get_base_log_dir()
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(TimedRotatingFileHandler(
            os.path.join(log_dir, f"{name}.log"), when="midnight", backupCount=30, encoding="utf-8",
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


Log = _build_logger("postflow")

__all__ = ["Log"]

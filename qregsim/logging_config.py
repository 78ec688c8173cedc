# qregsim/logging_config.py
"""Loggers for qregsim. Library modules only log; the bench harness
calls setup_logging() to get output on stdout."""
import logging
import sys

ROOT_LOGGER = "qregsim"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level=logging.INFO) -> logging.Logger:
    """Send qregsim records at `level` and above to stdout."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the qregsim logger; `name` is usually __name__."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")

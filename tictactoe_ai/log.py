import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "tictactoe_ai"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level="WARNING", log_file=None):
    """
    configure the package logger: stderr always, rotating file if asked
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))
    # fresh handlers on every call
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    fmt = logging.Formatter(LOG_FORMAT)
    stream = logging.StreamHandler()
    stream.setFormatter(fmt)
    logger.addHandler(stream)

    if log_file:
        folder = os.path.dirname(log_file)
        if folder:
            os.makedirs(folder, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=200_000, backupCount=3,
                                      encoding="utf-8", delay=True)
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    logger.propagate = False
    return logger

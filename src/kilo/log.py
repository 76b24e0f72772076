import logging

from .config import LoggingConfig

FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-20s - %(message)s"


def setup_logging(config: LoggingConfig) -> None:
    """Records go to a file only, the terminal is in raw mode while kilo runs."""
    logger = logging.getLogger("kilo")
    logger.propagate = False

    for old_handler in logger.handlers[:]:
        logger.removeHandler(old_handler)
        old_handler.close()

    handler: logging.Handler
    if config.file is None:
        handler = logging.NullHandler()
    else:
        handler = logging.FileHandler(config.file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(FORMAT))

    logger.addHandler(handler)
    level = logging.getLevelNamesMapping().get(config.level.upper(), logging.WARNING)
    logger.setLevel(level)

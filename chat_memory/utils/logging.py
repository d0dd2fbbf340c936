"""Logger factory shared by every chat_memory module."""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Return a logger for *name*.

    Format:  timestamp  [LEVEL]  chat_memory.module — message

    Records always propagate to the root logger.  A stdout handler is
    attached only when the root logger has no handlers yet, so a host that
    configures logging before importing chat_memory sees each record once.
    Configuring root logging afterwards prints records twice, once from
    the stdout handler and once from root.

    Parameters
    ----------
    name : str
        Typically ``__name__`` of the calling module.
    level : int
        Logging level (default: logging.INFO).

    Returns
    -------
    logging.Logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s  [%(levelname)s]  %(name)s — %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger

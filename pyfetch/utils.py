from __future__ import annotations
from typing import Optional
import logging

__all__ = (
    'setup_logging',
)


def setup_logging(handler: Optional[logging.Handler] = None,
                  level: Optional[int] = None,
                  root: bool = False
                  ) -> logging.Handler:
    """
    Attach a formatted handler to the pyfetch logger, or the root logger.

    The library never configures logging by itself; scripts call this to
    see the per-attempt debug records.

    Returns
    -------
    logging.Handler
        The handler that was attached.
    """
    handler = handler or logging.StreamHandler()

    handler.setFormatter(logging.Formatter(
        '[{asctime}] [{levelname}] {name}: {message}',
        '%Y-%m-%d %H:%M:%S',
        style='{'
    ))

    logger = logging.getLogger() if root else logging.getLogger(__name__.split('.')[0])
    logger.setLevel(level if level is not None else logging.DEBUG)
    logger.addHandler(handler)
    return handler

import logging
import sys
from typing import Union

LOG_FORMAT = '%(asctime)s - %(name)s - [%(levelname)s] - %(message)s'

def setup_logging(level: Union[int, str] = logging.INFO, stream=None):
    """
    Configures basic logging for the resonator optimizer.

    Args:
        level: The logging level, either a constant (logging.DEBUG) or its name ('DEBUG').
        stream: Output stream, stdout when omitted.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=stream or sys.stdout
    )

def get_logger(name: str) -> logging.Logger:
    """
    Retrieves a logger instance with a specific name.

    Args:
        name (str): The name for the logger, typically __name__.

    Returns:
        A logging.Logger instance.
    """
    return logging.getLogger(name)

# src/datatypes/utils/configure_logging.py
import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

LevelType = Union[str, int]


class LogWithTqdm(logging.Handler):
    """
    A logging handler that writes through `tqdm.write()`, so log lines do not
    tear up a progress bar that is being drawn on the same stream.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _to_level(level: LevelType, default: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), default)
    return level


def configure_logger(
        general_level: LevelType = "WARNING",
        module_specific_levels: Optional[Dict[str, LevelType]] = None,
        silenced_loggers: Optional[Dict[str, LevelType]] = None,
) -> logging.Logger:
    """
    Configures the root logger with a tqdm-aware handler.

    Only the command-line entry point calls this; library code never installs
    handlers of its own.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.WARNING))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in (module_specific_levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.INFO))

    # Muzzle noisy third-party loggers.
    for name, level in (silenced_loggers or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.CRITICAL))

    return root_logger

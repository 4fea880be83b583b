from __future__ import annotations

import logging
import os
from collections.abc import Mapping

LOG_ENV = "TERMEDIT_LOG"
LOG_LEVEL_ENV = "TERMEDIT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(environ: Mapping[str, str] | None = None) -> logging.Logger:
    # The terminal belongs to the editor, so records only ever go to a file.
    env = os.environ if environ is None else environ
    package_logger = logging.getLogger("termedit")
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    path = env.get(LOG_ENV)
    if not path:
        package_logger.addHandler(logging.NullHandler())
        return package_logger

    level_name = env.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger

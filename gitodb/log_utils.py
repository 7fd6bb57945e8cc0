"""Logging utilities for gitodb.

gitodb is used as a library as well as from its CLI, so the package logger
gets a no-op handler and stays silent unless the caller configures logging.
Modules only need ``getLogger``, which this module re-exports.

The CLI calls ``default_logging_config()``: setting ``GIT_TRACE`` to ``1``,
``2`` or ``true`` sends DEBUG records to stderr; an absolute path appends
them to that file. Anything else leaves logging at WARNING.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

getLogger = logging.getLogger

_GITODB_LOGGER = getLogger("gitodb")
_GITODB_LOGGER.addHandler(logging.NullHandler())

TRACE_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def _get_trace_target() -> Optional[Union[str, int]]:
    """Return 2 for stderr, an absolute path, or None when tracing is off."""
    trace_value = os.environ.get("GIT_TRACE", "")
    if not trace_value or trace_value.lower() in ("0", "false"):
        return None
    if trace_value.lower() in ("1", "2", "true"):
        return 2
    if os.path.isabs(trace_value):
        return trace_value
    return None


def default_logging_config() -> None:
    """Set up logging for command-line use."""
    target = _get_trace_target()
    if target is None:
        logging.basicConfig(level=logging.WARNING, stream=sys.stderr, format=TRACE_FORMAT)
    elif target == 2:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=TRACE_FORMAT)
    else:
        logging.basicConfig(level=logging.DEBUG, filename=str(target), format=TRACE_FORMAT)

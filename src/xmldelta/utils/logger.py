"""Namespaced loggers for xmldelta.

Every logger handed out lives below the ``xmldelta`` logger, so callers
can silence or enable the whole library with one logging call. No handlers
are configured here; that is left to the application.

Example:
    >>> import logging
    >>> logging.getLogger("xmldelta").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

_PACKAGE = "xmldelta"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for name, placed under the ``xmldelta`` namespace.

    Module names of the package itself are used as they are; any other
    name is prefixed.

    Example:
        >>> get_logger("engines").name
        'xmldelta.engines'
        >>> get_logger("xmldelta.parser").name
        'xmldelta.parser'
    """
    root, _, _ = name.partition(".")
    if root != _PACKAGE:
        name = f"{_PACKAGE}.{name}"
    return logging.getLogger(name)

"""Logger lookup for Bigote modules.

All Bigote loggers live under the ``bigote`` namespace so applications can
tune them with a single ``logging.getLogger("bigote")`` call. The library only
emits DEBUG records (template cache misses, missing partials, delimiter
switches) and never installs handlers.

Example:
    >>> import logging
    >>> logging.getLogger("bigote").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

_ROOT = "bigote"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the ``bigote`` namespace.

    Args:
        name: Module name, usually ``__name__``

    Example:
        >>> get_logger("bigote.writer").name
        'bigote.writer'
        >>> get_logger("partials").name
        'bigote.partials'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)

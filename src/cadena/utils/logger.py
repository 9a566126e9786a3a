"""Logger lookup for Cadena modules.

All Cadena loggers live under the "cadena" namespace, so an application
can enable compile diagnostics with a single call:

    >>> import logging
    >>> logging.getLogger("cadena").setLevel(logging.DEBUG)
    >>> import cadena
    >>> cadena.compile(b"abc")  # logs "Compiling pattern of 3 bytes"
    Regex(b'abc')

The library never installs handlers of its own.
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the standard library logger for ``name`` under "cadena.".

    Names already inside the namespace are used unchanged.

    Example:
        >>> get_logger("cadena.builder").name
        'cadena.builder'
        >>> get_logger("serialization").name
        'cadena.serialization'
    """
    if name != "cadena" and not name.startswith("cadena."):
        name = f"cadena.{name}"
    return logging.getLogger(name)

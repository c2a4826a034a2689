"""Configuration read from the environment.

    FINNDEBUG      dump tokens and AST before running a script (any non-empty value)
    FINN_HOST      interface the HTTP front end binds to
    PORT           port for the HTTP front end (``FINN_PORT`` is also accepted)
    FINN_TIMEOUT   seconds a submitted program may run before it is terminated


File: config.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import os

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 5.0


def debug_enabled() -> bool:
    """Return ``True`` when ``FINNDEBUG`` is set to a non-empty value."""
    return bool(os.environ.get("FINNDEBUG"))


def server_host() -> str:
    return os.environ.get("FINN_HOST") or DEFAULT_HOST


def server_port() -> int:
    """
    Port for the HTTP front end.

    Raises:
        ValueError: If the configured port is not a number between 1 and 65535.
    """
    raw = os.environ.get("PORT") or os.environ.get("FINN_PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"PORT must be a valid number, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535, got {port}")
    return port


def run_timeout() -> float:
    """
    Seconds a program submitted over HTTP may run.

    Raises:
        ValueError: If the configured timeout is not a positive number.
    """
    raw = os.environ.get("FINN_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"FINN_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"FINN_TIMEOUT must be positive, got {timeout}")
    return timeout

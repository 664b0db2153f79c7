from __future__ import annotations

from flask_session import Session
from flask_wtf.csrf import CSRFProtect

__all__ = [
    "csrf",
    "server_session",
]

csrf = CSRFProtect()
server_session = Session()

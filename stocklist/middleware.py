import logging
import threading
from collections.abc import Mapping
from contextlib import contextmanager

from werkzeug.http import parse_cookie

DEFAULT_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

logger = logging.getLogger(__name__)


class SessionLockMiddleware:
    """Serialize requests that carry the same session cookie.

    Flask-Session loads the session before the view runs and saves it after,
    so the lock has to span the whole WSGI call for a read-modify-write on the
    product list to be atomic. Only requests within this process are covered.
    """

    def __init__(self, wsgi_app, cookie_name: str):
        self.wsgi_app = wsgi_app
        self.cookie_name = cookie_name
        self._guard = threading.Lock()
        self._locks: dict[str, list] = {}  # session id -> [lock, holders]

    @contextmanager
    def _session_lock(self, session_id: str):
        with self._guard:
            entry = self._locks.setdefault(session_id, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._locks.pop(session_id, None)

    def active_sessions(self) -> int:
        with self._guard:
            return len(self._locks)

    def __call__(self, environ, start_response):
        session_id = parse_cookie(environ.get("HTTP_COOKIE", "")).get(self.cookie_name)
        if not session_id:
            return self.wsgi_app(environ, start_response)
        with self._session_lock(session_id):
            # Materialise the body so the session is saved before the lock drops.
            response = self.wsgi_app(environ, start_response)
            try:
                return [b"".join(response)]
            finally:
                close = getattr(response, "close", None)
                if close is not None:
                    close()


def register_middleware(app):
    """Register response headers and per-session request serialization."""

    configured_headers = app.config.get("SECURITY_HEADERS")
    security_headers = dict(DEFAULT_SECURITY_HEADERS)
    if isinstance(configured_headers, Mapping):
        security_headers.update(configured_headers)
    elif configured_headers:
        logger.warning("SECURITY_HEADERS config must be a mapping; ignoring invalid value.")

    custom_csp = app.config.get("CONTENT_SECURITY_POLICY")
    if isinstance(custom_csp, str) and custom_csp.strip():
        security_headers["Content-Security-Policy"] = custom_csp.strip()
    elif custom_csp:
        logger.warning("CONTENT_SECURITY_POLICY config must be a non-empty string or None.")

    @app.after_request
    def add_response_headers(response):
        for header, value in security_headers.items():
            response.headers.setdefault(header, value)
        for header, value in NO_CACHE_HEADERS.items():
            response.headers[header] = value
        return response

    if not isinstance(app.wsgi_app, SessionLockMiddleware):
        cookie_name = app.config.get("SESSION_COOKIE_NAME", "session")
        app.wsgi_app = SessionLockMiddleware(app.wsgi_app, cookie_name)

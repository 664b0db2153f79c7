"""Session capability used by the inventory page.

The request handler never touches ``flask.session`` directly; it receives a
``SessionStore``. Lifecycle: values are created on first access, read and
written during a request, and dropped together by ``clear()``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Sequence

from flask import has_request_context, session
from flask.sessions import NullSession
from flask_wtf.csrf import generate_csrf, validate_csrf
from wtforms.validators import ValidationError

from stocklist.exceptions import SessionStoreError
from stocklist.models.product import Product

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
FLASH_KEY = "flash_message"


class SessionStore(ABC):

    @abstractmethod
    def load_products(self) -> list[Product] | None:
        """Return the stored product list, or None if the session has none yet."""

    @abstractmethod
    def save_products(self, products: Sequence[Product]) -> None:
        """Replace the stored product list."""

    @abstractmethod
    def csrf_token(self) -> str:
        """Return the session's CSRF token, creating it on first access."""

    @abstractmethod
    def verify_csrf(self, submitted: str | None) -> bool:
        """Constant-time check of a submitted token against the session's."""

    @abstractmethod
    def set_flash(self, message: str) -> None:
        """Store the one-shot message shown by the next rendered page."""

    @abstractmethod
    def take_flash(self) -> str | None:
        """Return the flash message and remove it.

        The message is delivered at most once: after this call the session
        holds no flash message, whether or not one was present.
        """

    @abstractmethod
    def clear(self) -> None:
        """Forget everything stored for this visitor."""

    @contextmanager
    def mutation(self) -> Iterator[None]:
        """Scope of one read-modify-write on the product list."""
        yield

    def ensure_products(self, seed: Iterable[Product]) -> list[Product]:
        products = self.load_products()
        if products is None:
            products = list(seed)
            self.save_products(products)
        return products


class FlaskSessionStore(SessionStore):
    """``SessionStore`` over the current request's ``flask.session``."""

    def _session(self):
        if not has_request_context():
            raise SessionStoreError("No active request; the session is unavailable.")
        if isinstance(session, NullSession):
            raise SessionStoreError("Session backend unavailable (is SECRET_KEY configured?).")
        return session

    def load_products(self) -> list[Product] | None:
        raw = self._session().get(PRODUCTS_KEY)
        if raw is None:
            return None
        if not isinstance(raw, list):
            logger.warning("Discarding malformed product list of type %s", type(raw).__name__)
            return None
        products: list[Product] = []
        for entry in raw:
            try:
                products.append(Product.from_session(entry))
            except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
                logger.warning("Dropping unreadable product entry: %s", exc)
        return products

    def save_products(self, products: Sequence[Product]) -> None:
        self._session()[PRODUCTS_KEY] = [p.to_session() for p in products]

    def csrf_token(self) -> str:
        self._session()
        return generate_csrf()

    def verify_csrf(self, submitted: str | None) -> bool:
        self._session()
        if not submitted:
            return False
        try:
            validate_csrf(submitted)
        except ValidationError as exc:
            logger.info("CSRF token rejected: %s", exc)
            return False
        return True

    def set_flash(self, message: str) -> None:
        self._session()[FLASH_KEY] = message

    def take_flash(self) -> str | None:
        return self._session().pop(FLASH_KEY, None)

    def clear(self) -> None:
        self._session().clear()

    @contextmanager
    def mutation(self) -> Iterator[None]:
        # Cross-request exclusion is provided by SessionLockMiddleware.
        sess: Any = self._session()
        try:
            yield
        finally:
            sess.modified = True

"""Request handling for the inventory page.

One call of ``InventoryService.handle`` processes one HTTP request: it makes
sure the session is initialised, dispatches on method and action, and returns
either a ``Redirect`` (successful mutation, Post/Redirect/Get) or an
``InventoryPage`` for the view to render.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence, Union

from stocklist.models.product import SEED_PRODUCTS, Product
from stocklist.services import product_repository
from stocklist.services.product_validation import (
    SubmittedForm,
    collect_form,
    parse_price,
    validate,
)
from stocklist.services.session_store import SessionStore

logger = logging.getLogger(__name__)

MUTATING_METHODS = frozenset({"POST"})
DELETE_ACTION = "delete"

INVALID_REQUEST = "Invalid request"
INVALID_PRODUCT_ID = "Invalid product id."
PRODUCT_NOT_FOUND = "Product not found."

_PRODUCT_ID_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class InventoryRequest:
    """The parts of an HTTP request the inventory page looks at."""

    method: str
    path: str
    form: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "form", MappingProxyType(dict(self.form)))

    @property
    def is_mutating(self) -> bool:
        return self.method in MUTATING_METHODS

    @property
    def action(self) -> str:
        return (self.form.get("action") or "").strip()


@dataclass(frozen=True)
class Redirect:
    location: str


@dataclass(frozen=True)
class InventoryPage:
    products: tuple[Product, ...]
    categories: tuple[str, ...]
    errors: Mapping[str, str]
    submitted: SubmittedForm
    flash_message: str | None
    csrf_token: str


Outcome = Union[Redirect, InventoryPage]


def _strip_query(path: str) -> str:
    return path.split("?", 1)[0] or "/"


class InventoryService:

    def __init__(
        self,
        store: SessionStore,
        categories: Iterable[str],
        seed: Sequence[Product] = SEED_PRODUCTS,
    ) -> None:
        self._store = store
        self._categories = tuple(categories)
        self._seed = tuple(seed)

    def handle(self, request: InventoryRequest) -> Outcome:
        self._store.ensure_products(self._seed)
        self._store.csrf_token()

        errors: dict[str, str] = {}
        submitted = SubmittedForm()

        if request.is_mutating and request.action == DELETE_ACTION:
            outcome = self._delete(request)
            if isinstance(outcome, Redirect):
                return outcome
            errors = outcome
        elif request.is_mutating:
            submitted = collect_form(request.form)
            outcome = self._add(request, submitted)
            if isinstance(outcome, Redirect):
                return outcome
            errors = outcome

        return self._render(errors, submitted)

    # --- Flows ----------------------------------------------------------------

    def _delete(self, request: InventoryRequest) -> Redirect | dict[str, str]:
        if not self._store.verify_csrf(request.form.get("csrf")):
            logger.warning("Rejected delete with missing or invalid CSRF token on %s", request.path)
            return {"general": INVALID_REQUEST}

        raw_id = request.form.get("id") or ""
        if not _PRODUCT_ID_RE.fullmatch(raw_id):
            return {"general": INVALID_PRODUCT_ID}

        with self._store.mutation():
            products = self._store.load_products() or []
            index = product_repository.find_index_by_id(products, raw_id)
            if index is None:
                logger.info("Delete requested for unknown product #%s", raw_id)
                return {"general": PRODUCT_NOT_FOUND}
            removed = products[index]
            self._store.save_products(product_repository.delete_at(products, index))
            self._store.set_flash(f"Product #{removed.id} deleted.")

        logger.info("Deleted product #%s", removed.id)
        return Redirect(_strip_query(request.path))

    def _add(self, request: InventoryRequest, submitted: SubmittedForm) -> Redirect | dict[str, str]:
        errors = validate(submitted, self._categories)
        if errors:
            logger.info("Rejected product submission; invalid fields: %s", ", ".join(sorted(errors)))
            return errors

        # validate() has already rejected every price parse_price cannot read.
        draft = Product(
            id=0,
            name=submitted.name,
            description=submitted.description,
            price=parse_price(submitted.price),
            category=submitted.category,
        )

        with self._store.mutation():
            products = self._store.load_products() or []
            updated, new_id = product_repository.insert(products, draft)
            self._store.save_products(updated)
            self._store.set_flash(f"Product added successfully (ID: {new_id}).")

        logger.info("Added product #%s in category %s", new_id, submitted.category)
        return Redirect(_strip_query(request.path))

    # --- Rendering ------------------------------------------------------------

    def _render(self, errors: Mapping[str, str], submitted: SubmittedForm) -> InventoryPage:
        flash_message = self._store.take_flash()
        products = self._store.load_products() or []
        return InventoryPage(
            products=tuple(product_repository.list_all(products)),
            categories=self._categories,
            errors=MappingProxyType(dict(errors)),
            submitted=submitted,
            flash_message=flash_message,
            csrf_token=self._store.csrf_token(),
        )

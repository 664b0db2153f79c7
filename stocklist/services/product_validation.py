"""Validation rules for the add-product form.

Each field owns an ordered tuple of rules. Rules are pure predicates over the
trimmed field value; the first failing rule of a field produces that field's
message, and every field is checked on every call.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Callable, Collection, Mapping

from stocklist.models.product import round_price

__all__ = [
    "FIELDS",
    "FIELD_RULES",
    "Rule",
    "SubmittedForm",
    "check_field",
    "collect_form",
    "parse_price",
    "validate",
]

FIELDS = ("name", "description", "price", "category")

NAME_MIN_LENGTH = 2
DESCRIPTION_MIN_LENGTH = 5

# Signed decimal literal with optional fraction and exponent; no hex, no
# NaN/Infinity, no digit separators.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class SubmittedForm:
    """The four add-form fields exactly as typed, after trimming."""

    name: str = ""
    description: str = ""
    price: str = ""
    category: str = ""

    def get(self, field: str) -> str:
        return getattr(self, field) if field in FIELDS else ""

    def as_dict(self) -> dict[str, str]:
        return asdict(self)

    @property
    def is_empty(self) -> bool:
        return not any(self.as_dict().values())


def collect_form(fields: Mapping[str, object]) -> SubmittedForm:
    """Build a SubmittedForm from raw request fields; missing fields are empty."""
    values = {}
    for field in FIELDS:
        raw = fields.get(field)
        if isinstance(raw, (list, tuple)):
            raw = raw[0] if raw else ""
        values[field] = "" if raw is None else str(raw).strip()
    return SubmittedForm(**values)


def parse_price(raw: str) -> Decimal | None:
    """Return the price rounded to cents, or None when ``raw`` is not a number.

    Any decimal literal is accepted regardless of its digit count; only
    exponents beyond the decimal module's default range are refused.
    """
    if not _DECIMAL_RE.fullmatch(raw):
        return None
    try:
        return round_price(Decimal(raw))
    except (ArithmeticError, ValueError):
        return None


@dataclass(frozen=True)
class Rule:
    code: str
    message: str
    fails: Callable[[str, Collection[str]], bool]


def _is_blank(value: str, _categories: Collection[str]) -> bool:
    return value == ""


def _shorter_than(minimum: int) -> Callable[[str, Collection[str]], bool]:
    def predicate(value: str, _categories: Collection[str]) -> bool:
        return len(value) < minimum

    return predicate


def _not_numeric(value: str, _categories: Collection[str]) -> bool:
    return parse_price(value) is None


def _not_positive(value: str, _categories: Collection[str]) -> bool:
    amount = parse_price(value)
    return amount is None or amount <= 0


def _not_a_category(value: str, categories: Collection[str]) -> bool:
    return value not in categories


FIELD_RULES: dict[str, tuple[Rule, ...]] = {
    "name": (
        Rule("required", "Name is required", _is_blank),
        Rule(
            "too_short",
            f"Name must be at least {NAME_MIN_LENGTH} characters",
            _shorter_than(NAME_MIN_LENGTH),
        ),
    ),
    "description": (
        Rule("required", "Description is required", _is_blank),
        Rule(
            "too_short",
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters",
            _shorter_than(DESCRIPTION_MIN_LENGTH),
        ),
    ),
    "price": (
        Rule("required", "Price is required", _is_blank),
        Rule("not_numeric", "Price must be a number", _not_numeric),
        Rule("not_positive", "Price must be greater than 0", _not_positive),
    ),
    "category": (
        Rule("required", "Category is required", _is_blank),
        Rule("invalid", "Invalid category", _not_a_category),
    ),
}


def check_field(field: str, value: str, categories: Collection[str]) -> Rule | None:
    """Return the first rule ``value`` breaks, or None."""
    for rule in FIELD_RULES[field]:
        if rule.fails(value, categories):
            return rule
    return None


def validate(form: SubmittedForm, categories: Collection[str]) -> dict[str, str]:
    """Map each failing field to its message; an empty dict means valid."""
    errors: dict[str, str] = {}
    for field in FIELDS:
        rule = check_field(field, form.get(field), categories)
        if rule is not None:
            errors[field] = rule.message
    return errors

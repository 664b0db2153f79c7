"""Product record kept in the visitor's session.

Products are created by the add form and removed by the delete button; they
are never edited in place, so the record is frozen.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Mapping

PRICE_QUANTUM = Decimal("0.01")


def round_price(amount: Decimal) -> Decimal:
    """Round half away from zero to two fraction digits.

    Precision grows with the magnitude so every finite amount within the
    default exponent range keeps all of its integer digits.
    """
    with localcontext() as ctx:
        if not amount.is_finite() or amount.adjusted() > ctx.Emax:
            raise InvalidOperation(f"cannot round {amount!s:.40} to cents")
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    description: str
    price: Decimal
    category: str

    def to_session(self) -> dict[str, Any]:
        """Plain-data form stored in the session; price travels as a string."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "category": self.category,
        }

    @classmethod
    def from_session(cls, raw: Mapping[str, Any]) -> Product:
        return cls(
            id=int(raw["id"]),
            name=str(raw["name"]),
            description=str(raw.get("description", "")),
            price=round_price(Decimal(str(raw["price"]))),
            category=str(raw["category"]),
        )


SEED_PRODUCTS: tuple[Product, ...] = (
    Product(
        id=1,
        name="USB-C Cable",
        description="Fast-charging braided cable (1m).",
        price=Decimal("5.50"),
        category="Electronics",
    ),
    Product(
        id=2,
        name="Notebook A5",
        description="Lined paper, 100 pages.",
        price=Decimal("2.25"),
        category="Books",
    ),
)

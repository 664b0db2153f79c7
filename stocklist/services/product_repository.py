"""List operations over the session's product list.

Every function takes the current list and returns new values; nothing here
keeps state between calls. Absence is reported as ``None``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from stocklist.models.product import Product


def list_all(products: Sequence[Product]) -> list[Product]:
    return list(products)


def find_index_by_id(products: Sequence[Product], product_id: int | str) -> int | None:
    wanted = str(product_id)
    for index, product in enumerate(products):
        if str(product.id) == wanted:
            return index
    return None


def find_by_id(products: Sequence[Product], product_id: int | str) -> Product | None:
    index = find_index_by_id(products, product_id)
    return None if index is None else products[index]


def next_id(products: Sequence[Product]) -> int:
    if not products:
        return 1
    return max(p.id for p in products) + 1


def insert(products: Sequence[Product], product: Product) -> tuple[list[Product], int]:
    """Append ``product`` under a freshly assigned id."""
    assigned = next_id(products)
    return [*products, replace(product, id=assigned)], assigned


def delete_at(products: Sequence[Product], index: int) -> list[Product]:
    return [*products[:index], *products[index + 1:]]

"""Unit tests for the product list operations."""

from decimal import Decimal

from stocklist.models.product import Product
from stocklist.services import product_repository as repo


def _product(pid: int, name: str = "Item") -> Product:
    return Product(id=pid, name=name, description="Something", price=Decimal("1.00"), category="Other")


class TestNextId:

    def test_empty_list_starts_at_one(self):
        assert repo.next_id([]) == 1

    def test_one_more_than_highest_id(self):
        assert repo.next_id([_product(5), _product(2)]) == 6


class TestFind:

    def test_finds_by_string_or_int(self):
        products = [_product(1), _product(7), _product(3)]
        assert repo.find_index_by_id(products, 7) == 1
        assert repo.find_index_by_id(products, "7") == 1

    def test_missing_id_returns_none(self):
        assert repo.find_index_by_id([_product(1)], "2") is None
        assert repo.find_by_id([_product(1)], 2) is None

    def test_find_by_id_returns_product(self):
        assert repo.find_by_id([_product(1, "A"), _product(2, "B")], "2").name == "B"


class TestInsert:

    def test_assigns_next_id_and_appends(self):
        products = [_product(1), _product(4)]
        updated, new_id = repo.insert(products, _product(0, "New"))
        assert new_id == 5
        assert [p.id for p in updated] == [1, 4, 5]
        assert updated[-1].name == "New"

    def test_does_not_modify_input(self):
        products = [_product(1)]
        repo.insert(products, _product(0))
        assert [p.id for p in products] == [1]

    def test_first_insert_into_empty_list(self):
        updated, new_id = repo.insert([], _product(0))
        assert new_id == 1
        assert updated[0].id == 1


class TestDeleteAt:

    def test_removes_exactly_one_and_keeps_order(self):
        products = [_product(1, "A"), _product(2, "B"), _product(3, "C")]
        updated = repo.delete_at(products, 1)
        assert [(p.id, p.name) for p in updated] == [(1, "A"), (3, "C")]
        assert len(products) == 3

    def test_list_all_is_a_copy(self):
        products = [_product(1)]
        copy = repo.list_all(products)
        copy.append(_product(2))
        assert len(products) == 1

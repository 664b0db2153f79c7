from decimal import Decimal

from stocklist.utils.template_filters import format_price


def test_format_price_two_decimals_and_grouping():
    assert format_price(Decimal("1234.5")) == "1,234.50"
    assert format_price(Decimal("5.5")) == "5.50"


def test_format_price_keeps_every_digit_of_large_amounts():
    assert format_price(Decimal("9" * 30 + ".00")) == "999," * 9 + "999.00"


def test_format_price_fallbacks():
    assert format_price(None) == "0.00"
    assert format_price("not a number") == "0.00"


def test_filter_is_registered(app):
    assert app.jinja_env.filters["price"] is format_price

from decimal import Decimal, InvalidOperation


def format_price(value):
    """Format an amount with thousands separators and two decimals"""
    if value is None:
        return "0.00"
    try:
        return f"{Decimal(str(value)):,.2f}"
    except (InvalidOperation, ValueError, TypeError):
        return "0.00"


def register_template_filters(app):
    app.add_template_filter(format_price, "price")

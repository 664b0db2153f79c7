from .product import SEED_PRODUCTS, Product, round_price

__all__ = ["Product", "SEED_PRODUCTS", "round_price"]

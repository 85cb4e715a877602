from .amounts import parse_price, usable_price

__all__ = ["parse_price", "usable_price"]

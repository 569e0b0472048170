from . import bids, products

__all__ = ["bids", "products"]

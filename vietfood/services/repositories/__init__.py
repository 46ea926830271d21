"""
Repository Pattern for Database Operations

- ProductRepository: product catalog reads used by the cart
"""
from .product_repo import ProductRepository

__all__ = [
    "ProductRepository",
]

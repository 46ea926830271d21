# Services Module
from .catalog import HttpProductLookup, ProductLookup, RepositoryProductLookup, get_repository_lookup
from .models import Product, ProductVariant

__all__ = [
    "HttpProductLookup",
    "ProductLookup",
    "RepositoryProductLookup",
    "get_repository_lookup",
    "Product",
    "ProductVariant",
]

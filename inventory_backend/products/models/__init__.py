"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .product import Product
from .product_file import ProductFile

__all__ = [
    "Product",
    "ProductFile",
]

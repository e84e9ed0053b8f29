"""Catalog API.

Read-only HTTP endpoints over a relational catalog of products,
categories, and brands.
"""

__version__ = "0.1.0"

"""Dairycart - commerce backend for products, variants, discounts and users."""

__version__ = "0.1.0"

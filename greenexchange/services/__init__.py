"""
Service layer that orchestrates the domain catalogs.
"""

from .registry import BookingPreview, ExchangeRegistry

__all__ = ["BookingPreview", "ExchangeRegistry"]

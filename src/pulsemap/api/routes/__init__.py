"""Route group exports."""

from . import health, stores, view

__all__ = ["health", "stores", "view"]

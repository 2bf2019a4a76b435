"""Store dataset service helpers."""

from .stats import (
    compute_store_summary,
    list_distribution_centers,
    store_detail,
)

__all__ = [
    "compute_store_summary",
    "list_distribution_centers",
    "store_detail",
]

"""
Data models for the finops UI.

- ``common``: pagination, sort, response envelopes
- ``resources``: registry of listable REST resources
- ``filters``: filter panel values and query serialization
- ``requests``: create payloads and charge arithmetic
"""

from finops_ui.models.common import (
    AutocompleteResult,
    DownloadFile,
    PageEnvelope,
    PaginationInfo,
    SortConfig,
    TransactionSummary,
)
from finops_ui.models.resources import RESOURCES, Column, ResourceSpec, get_resource

__all__ = [
    "AutocompleteResult",
    "Column",
    "DownloadFile",
    "PageEnvelope",
    "PaginationInfo",
    "RESOURCES",
    "ResourceSpec",
    "SortConfig",
    "TransactionSummary",
    "get_resource",
]

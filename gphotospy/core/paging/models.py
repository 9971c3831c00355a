"""Paging progress notifications."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PagingProgress:
    """
    Emitted after each page that has a continuation.

    Attributes:
        page_size: Records in the page just received
        page_number: One-based page (or batch) number
        record_count: Distinct records yielded so far
        min_date: Earliest creation time in the page (media items only)
        max_date: Latest creation time in the page (media items only)
    """
    page_size: int
    page_number: int
    record_count: int
    min_date: Optional[datetime] = None
    max_date: Optional[datetime] = None

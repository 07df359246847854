"""
Plain data shapes accepted by the Writings API.
"""
from __future__ import annotations

from typing import TypedDict


class WritingContentData(TypedDict, total=False):
    """
    One language's content block. Any key left out keeps its current value
    on update, or the field default on create.
    """
    title: str
    description: str
    writer: str
    cover_url: str
    file_url: str
    file_format: str
    file_size_bytes: int | None
    page_count: int | None
    genre: str

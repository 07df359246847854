"""
Plain data shapes accepted by the News API.
"""
from __future__ import annotations

from typing import TypedDict

from typing_extensions import NotRequired


class NewsContentData(TypedDict, total=False):
    title: str
    description: str


class NewsMediaData(TypedDict):
    """
    One media entry to attach to a News item. ``sort_order`` defaults to 0.
    """
    media_type: str
    url: NotRequired[str]
    external_url: NotRequired[str]
    embed_url: NotRequired[str]
    sort_order: NotRequired[int]

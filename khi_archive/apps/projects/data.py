"""
Plain data shapes accepted by the Projects API.
"""
from __future__ import annotations

from typing import TypedDict

from typing_extensions import NotRequired


class ProjectMediaData(TypedDict):
    """
    One media entry to attach to a Project.

    If ``sort_order`` is missing, the entry's position in the submitted list
    is used.
    """
    media_type: str
    url: NotRequired[str]
    caption: NotRequired[str]
    sort_order: NotRequired[int]

"""
Audit fields for content items.

``AuditedMixin`` only declares the four columns. Nothing populates them
implicitly: the app APIs call ``stamp_created`` / ``stamp_updated`` at write
time, with a single ``now`` shared by the item, its media and its log row.
"""
from __future__ import annotations

from datetime import datetime, timezone

from django.db import models

from .fields import manual_date_time_field

__all__ = [
    "AuditedMixin",
    "actor_name",
    "stamp_created",
    "stamp_updated",
    "utc_now",
]


class AuditedMixin(models.Model):
    """
    Adds created/updated timestamps and the names of who made those changes.

    ``created_by`` / ``updated_by`` are free-form actor names rather than
    foreign keys, since the user directory lives outside this project.
    """
    created_at = manual_date_time_field(editable=False)
    updated_at = manual_date_time_field(editable=False)
    created_by = models.CharField(max_length=120, blank=True, null=False, default="", editable=False)
    updated_by = models.CharField(max_length=120, blank=True, null=False, default="", editable=False)

    class Meta:
        abstract = True


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def actor_name(actor) -> str:
    """
    Normalize whatever we were given as an actor into a name string.

    Accepts ``None``, a plain string, or a user object (anything with
    ``get_username``).
    """
    if actor is None:
        return ""
    if hasattr(actor, "get_username"):
        return actor.get_username() or ""
    return str(actor)[:120]


def stamp_created(instance: AuditedMixin, actor=None, now: datetime | None = None) -> datetime:
    """
    Set all four audit fields on a not-yet-saved instance. Returns the time used.
    """
    now = now or utc_now()
    name = actor_name(actor)
    instance.created_at = now
    instance.updated_at = now
    instance.created_by = name
    instance.updated_by = name
    return now


def stamp_updated(instance: AuditedMixin, actor=None, now: datetime | None = None) -> datetime:
    """
    Set the "updated" audit fields on an existing instance. Returns the time used.
    """
    now = now or utc_now()
    instance.updated_at = now
    instance.updated_by = actor_name(actor)
    return now

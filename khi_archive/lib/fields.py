"""
Convenience functions to make consistent field conventions easier.

Taxonomy names are stored exactly as they were entered (case-sensitive
uniqueness), while titles and descriptions are stored with case-insensitive
collations so they sort naturally. Searching is always done case-insensitively
through the ``lower`` transform registered at the bottom of this module, so
the two storage policies never leak into query behavior.

MySQL is case-insensitive by default, SQLite and Postgres are case-sensitive,
which is why every text field here declares per-vendor collations.
"""
from __future__ import annotations

import hashlib

from django.db import models
from django.db.models import Value
from django.db.models.functions import Lower

from .collations import MultiCollationMixin
from .validators import validate_utc_datetime


def create_hash_digest(data_bytes: bytes) -> str:
    """
    Create a 40-character, lower-case hex string representation of a hash digest.

    The hash digest itself is 20-bytes using BLAKE2b.

    Blacklisted tokens are looked up by this digest, so changing the hash
    function would silently un-blacklist every stored token.
    """
    return hashlib.blake2b(data_bytes, digest_size=20).hexdigest()


def case_insensitive_char_field(**kwargs) -> MultiCollationCharField:
    """
    Return a case-insensitive ``MultiCollationCharField``.

    Entries will sort in a case-insensitive manner, and unique indexes will be
    case insensitive.

    You may override any argument that you would normally pass into
    ``MultiCollationCharField`` (which is itself a subclass of ``CharField``).
    """
    final_kwargs = {
        "null": False,
        "db_collations": {
            "sqlite": "NOCASE",
            "mysql": "utf8mb4_unicode_ci",
        },
    }
    final_kwargs.update(kwargs)

    return MultiCollationCharField(**final_kwargs)


def case_sensitive_char_field(**kwargs) -> MultiCollationCharField:
    """
    Return a case-sensitive ``MultiCollationCharField``.

    "History" and "history" are distinct values, and you would not get a
    unique constraint violation by adding them both to the same table field.

    You may override any argument that you would normally pass into
    ``MultiCollationCharField`` (which is itself a subclass of ``CharField``).
    """
    final_kwargs = {
        "null": False,
        "db_collations": {
            "sqlite": "BINARY",
            "mysql": "utf8mb4_bin",
        },
    }
    final_kwargs.update(kwargs)

    return MultiCollationCharField(**final_kwargs)


def content_text_field(**kwargs) -> MultiCollationTextField:
    """
    Long-form, optional text (descriptions, notes, audit details).

    Uses a case-insensitive collation, since the only thing we ever do with
    these columns besides display is substring search.
    """
    final_kwargs = {
        "blank": True,
        "null": False,
        "default": "",
        "db_collations": {
            "sqlite": "NOCASE",
            "mysql": "utf8mb4_unicode_ci",
        },
    }
    final_kwargs.update(kwargs)

    return MultiCollationTextField(**final_kwargs)


def url_field(max_length=1024, **kwargs) -> models.CharField:
    """
    A stored URL (S3 object URL, external page, embed link). Always optional.

    We use a CharField rather than a URLField because storage-relative paths
    like ``testweb/images/cover.jpg`` are valid values too.
    """
    return models.CharField(max_length=max_length, blank=True, null=False, default="", **kwargs)


def hash_field() -> models.CharField:
    """
    Holds a digest produced by ``create_hash_digest``.
    """
    return models.CharField(
        max_length=40,
        blank=False,
        null=False,
        editable=False,
    )


def manual_date_time_field(**kwargs) -> models.DateTimeField:
    """
    DateTimeField that does not auto-generate values.

    The datetimes entered for this field *must be UTC* or it will raise a
    ValidationError.

    A content item, its media and its audit log row are written in the same
    transaction and should carry the exact same timestamp, so callers set a
    datetime up front and pass it in (see ``khi_archive.lib.audit``).
    """
    return models.DateTimeField(
        auto_now=False,
        auto_now_add=False,
        null=False,
        validators=[
            validate_utc_datetime,
        ],
        **kwargs,
    )


class MultiCollationCharField(MultiCollationMixin, models.CharField):
    """
    CharField subclass with per-database-vendor collation settings.

    Django's CharField supports a single ``db_collation`` value, which is no
    good when tests run on SQLite and production runs on MySQL.
    """


class MultiCollationTextField(MultiCollationMixin, models.TextField):
    """
    TextField subclass with per-database-vendor collation settings.
    """


# Allow ``name__lower__contains=...`` style lookups. Under a binary collation
# MySQL's LIKE is case-sensitive, so case-insensitive matching has to go
# through LOWER() explicitly.
MultiCollationCharField.register_lookup(Lower)
MultiCollationTextField.register_lookup(Lower)


def lowered(text: str) -> Lower:
    """
    ``LOWER(text)``, evaluated by the database rather than in Python.

    Compare this against a ``__lower`` lookup so that both sides are folded
    by the same function. SQLite's LOWER() only folds ASCII, so mixing it with
    ``str.lower()`` would miss non-ASCII text like "Şêx" even on an exact
    match.
    """
    return Lower(Value(text, output_field=models.CharField()))

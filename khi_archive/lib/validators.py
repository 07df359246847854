"""
Useful validation methods
"""
from datetime import datetime, timezone

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


def validate_utc_datetime(dt: datetime):
    if dt.tzinfo != timezone.utc:
        raise ValidationError(
            _("The timezone for %(datetime)s is not UTC."),
            params={"datetime": dt},
        )


def validate_taxonomy_name(name: str):
    """
    Tag and Keyword names are single-line, non-blank strings.
    """
    if not name or not name.strip():
        raise ValidationError(_("Taxonomy names cannot be blank."))
    if name != name.strip():
        raise ValidationError(
            _("%(name)r has leading or trailing whitespace."),
            params={"name": name},
        )
    for reserved_char in ("\t", "\n", "\r"):
        if reserved_char in name:
            raise ValidationError(
                _("%(name)r cannot contain line breaks or tabs."),
                params={"name": name},
            )

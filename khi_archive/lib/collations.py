"""
Collation helpers so that a single field definition can carry different
collation settings per database vendor. The ``fields`` module builds on this
to give taxonomy names and titles the same case behavior on SQLite (tests) and
MySQL (production).
"""
from django.db import models


class MultiCollationMixin:
    """
    Mixin to enable multiple, database-vendor-specific collations.

    Mix this into subclasses of CharField and TextField, the only field types
    we store text in.
    """

    def __init__(self, *args, db_collations=None, db_collation=None, **kwargs):  # pylint: disable=unused-argument
        """
        Init like any field, but accept ``db_collations`` instead of ``db_collation``.

        ``db_collations`` maps vendor names to collations, like::

          {
            'mysql': 'utf8mb4_bin',
            'sqlite': 'BINARY'
          }

        A CharField-style ``db_collation`` is accepted and ignored, since the
        per-vendor mapping is the only source of truth.
        """
        super().__init__(*args, **kwargs)
        self.db_collations = db_collations or {}

    def db_parameters(self, connection):
        """
        Return database parameters for this field, with the vendor collation.
        """
        db_params = models.Field.db_parameters(self, connection)

        if connection.vendor in self.db_collations:
            db_params["collation"] = self.db_collations[connection.vendor]

        return db_params

    def deconstruct(self):
        """
        Serialize the field for migration files, including ``db_collations``.
        """
        name, path, args, kwargs = super().deconstruct()
        if self.db_collations:
            kwargs["db_collations"] = self.db_collations
        return name, path, args, kwargs

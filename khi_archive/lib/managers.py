"""
Custom Django ORM Managers.
"""
from django.db import models
from django.db.models.query import QuerySet


class WithRelationsManager(models.Manager):
    """
    Custom Manager that adds select_related and prefetch_related to the
    default queryset.

    Content items are nearly always rendered together with their tags,
    keywords and media, so their models declare a distinctly named manager
    that loads those in a fixed number of queries::

      class Project(models.Model):
          with_relations = WithRelationsManager(
              prefetch=("tags", "keywords", "media"),
          )
    """
    def __init__(self, *relations, prefetch=()):
        """
        Init with a list of relations for select_related, and optionally a
        list of many-valued relations for prefetch_related.
        """
        self._relations = relations
        self._prefetch = tuple(prefetch)
        super().__init__()

    def get_queryset(self) -> QuerySet:
        qs = super().get_queryset()
        if self._relations:
            qs = qs.select_related(*self._relations)
        if self._prefetch:
            qs = qs.prefetch_related(*self._prefetch)
        return qs

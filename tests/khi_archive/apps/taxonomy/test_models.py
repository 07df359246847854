"""
Tests for the Tag / Keyword models.
"""
from django.core.exceptions import ValidationError

from khi_archive.apps.taxonomy.models import Tag
from khi_archive.lib.test_utils import TestCase


class TestTagModel(TestCase):

    def test_str(self):
        tag = Tag.objects.create(name="history")
        assert str(tag) == f"<Tag> ({tag.pk}) history"
        assert repr(tag) == str(tag)

    def test_full_clean_reports_duplicate(self):
        Tag.objects.create(name="history")
        with self.assertRaises(ValidationError):
            Tag(name="history").full_clean()

    def test_whitespace_is_rejected(self):
        with self.assertRaises(ValidationError):
            Tag(name=" history").full_clean()

"""
Tests for the Writings API.
"""
from datetime import datetime, timezone

import ddt  # type: ignore[import]
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from freezegun import freeze_time

from khi_archive.apps.taxonomy.models import Tag
from khi_archive.apps.writings import api as writings_api
from khi_archive.apps.writings.models import Writing, WritingLog, WritingLogAction, WritingTopic
from khi_archive.lib.test_utils import TestCase

User = get_user_model()

CREATED = datetime(2024, 6, 1, 8, 0, 0, tzinfo=timezone.utc)


class WritingsTestCase(TestCase):
    """
    Base class with a handful of writings in one or both languages.
    """

    @classmethod
    def setUpTestData(cls) -> None:
        cls.sorani = writings_api.create_writing(
            content_languages=["CKB"],
            ckb_content={"title": "مێژووی کوردستان", "writer": "Ahmad Mukhtar", "genre": "history"},
            writing_topic="historical",
            tags_ckb=["kurdistan"],
            keywords_ckb=["ottoman"],
            created=CREATED,
        )
        cls.kurmanji = writings_api.create_writing(
            content_languages=["KMR"],
            kmr_content={"title": "Dîroka Kurdistanê", "writer": "Celadet Bedirxan"},
            writing_topic="LINGUISTICS",
            published_by_institute=True,
            tags_kmr=["Kurdistan", "grammar"],
            keywords_kmr=["alphabet"],
            created=CREATED,
        )
        cls.both = writings_api.create_writing(
            content_languages=["CKB", "KMR"],
            ckb_content={"title": "Folklore CKB", "writer": "Hemin"},
            kmr_content={"title": "Folklore KMR", "writer": "Cegerxwîn"},
            writing_topic=WritingTopic.FOLKLORE,
            published_by_institute=True,
            tags_ckb=["songs"],
            tags_kmr=["songs", "stories"],
            created=CREATED,
        )


class TestCreateWriting(WritingsTestCase):

    def test_content_is_stored_per_language(self):
        writing = writings_api.get_writing(self.both.pk)
        assert writing.title_ckb == "Folklore CKB"
        assert writing.title_kmr == "Folklore KMR"
        assert writing.writer_kmr == "Cegerxwîn"
        assert writing.content_languages == ["CKB", "KMR"]
        assert writing.writing_topic == "FOLKLORE"

    def test_display_title(self):
        assert self.kurmanji.display_title == "Dîroka Kurdistanê"
        assert self.both.display_title == "Folklore CKB"

    def test_creation_is_logged(self):
        [log] = writings_api.get_writing_logs(self.sorani.pk)
        assert log.action == WritingLogAction.CREATED
        assert log.writing == self.sorani
        assert log.writing_ref == self.sorani.pk
        assert log.created_at == CREATED

    def test_actor_is_logged(self):
        user = User.objects.create(username="editor")
        writing = writings_api.create_writing(
            content_languages=["CKB"],
            ckb_content={"title": "Logged"},
            created_by=user,
            request_id="req-1",
        )
        [log] = writings_api.get_writing_logs(writing.pk)
        assert log.actor_id == str(user.pk)
        assert log.actor_name == "editor"
        assert log.request_id == "req-1"
        assert writing.created_by == "editor"

    def test_content_languages_required(self):
        with self.assertRaises(ValidationError) as ctx:
            writings_api.create_writing(content_languages=[], ckb_content={"title": "No language"})
        assert "content_languages" in ctx.exception.message_dict

    def test_title_required_per_language(self):
        with self.assertRaises(ValidationError) as ctx:
            writings_api.create_writing(
                content_languages=["CKB", "KMR"],
                ckb_content={"title": "Only Sorani"},
            )
        assert "title_kmr" in ctx.exception.message_dict
        assert not Writing.objects.filter(title_ckb="Only Sorani").exists()

    def test_unknown_content_field(self):
        with self.assertRaises(ValidationError):
            writings_api.create_writing(content_languages=["CKB"], ckb_content={"title": "x", "isbn": "123"})

    def test_unknown_topic(self):
        with self.assertRaises(ValidationError):
            writings_api.create_writing(
                content_languages=["CKB"], ckb_content={"title": "x"}, writing_topic="gardening",
            )

    def test_file_format_is_uppercased(self):
        writing = writings_api.create_writing(
            content_languages=["KMR"],
            kmr_content={"title": "Book", "file_format": "pdf", "page_count": 120},
        )
        assert writing.file_format_kmr == "PDF"
        assert writing.page_count_kmr == 120


class TestTaxonomyLookups(WritingsTestCase):

    def test_languages_are_independent(self):
        assert list(writings_api.get_writings_by_tag_ckb("kurdistan")) == [self.sorani]
        assert list(writings_api.get_writings_by_tag_kmr("kurdistan")) == [self.kurmanji]

    def test_tag_only_in_one_language(self):
        assert not writings_api.get_writings_by_tag_ckb("grammar")
        assert list(writings_api.get_writings_by_tag_kmr("GRAMMAR")) == [self.kurmanji]

    def test_same_name_in_both_sets(self):
        assert list(writings_api.get_writings_by_tag_ckb("songs")) == [self.both]
        assert list(writings_api.get_writings_by_tag_kmr("songs")) == [self.both]
        assert list(writings_api.get_writings_by_tag("songs")) == [self.both]

    def test_either_language(self):
        assert list(writings_api.get_writings_by_tag("KURDISTAN")) == [self.sorani, self.kurmanji]

    def test_keywords(self):
        assert list(writings_api.get_writings_by_keyword_ckb("Ottoman")) == [self.sorani]
        assert not writings_api.get_writings_by_keyword_kmr("ottoman")
        assert list(writings_api.get_writings_by_keyword_kmr("alphabet")) == [self.kurmanji]

    def test_exact_match_only(self):
        assert not writings_api.get_writings_by_tag_ckb("kurd")

    def test_keyword_in_either_language(self):
        assert list(writings_api.get_writings_by_keyword("OTTOMAN")) == [self.sorani]
        assert list(writings_api.get_writings_by_keyword("alphabet")) == [self.kurmanji]
        assert not writings_api.get_writings_by_keyword("alpha")

    def test_keyword_in_both_sets(self):
        writing = writings_api.create_writing(
            content_languages=["CKB", "KMR"],
            ckb_content={"title": "Ottoman records"},
            kmr_content={"title": "Belgeyên Osmanî"},
            keywords_ckb=["ottoman"],
            keywords_kmr=["Ottoman"],
        )
        assert list(writings_api.get_writings_by_keyword("ottoman")) == [self.sorani, writing]

    def test_exact_lookups_strip_input(self):
        assert list(writings_api.get_writings_by_tag_kmr(" grammar ")) == [self.kurmanji]
        assert list(writings_api.get_writings_by_tag(" songs\n")) == [self.both]
        assert list(writings_api.get_writings_by_keyword_ckb(" ottoman ")) == [self.sorani]
        assert list(writings_api.get_writings_by_keyword(" alphabet ")) == [self.kurmanji]

    def test_non_ascii_names(self):
        writing = writings_api.create_writing(
            content_languages=["KMR"],
            kmr_content={"title": "Çîrokên Şevê", "writer": "Şêxmûs Sefer"},
            tags_kmr=["Çîrok"],
            keywords_kmr=["Şev"],
        )
        assert list(writings_api.get_writings_by_tag_kmr("Çîrok")) == [writing]
        assert list(writings_api.get_writings_by_tag("Çîrok")) == [writing]
        assert list(writings_api.get_writings_by_keyword("Şev")) == [writing]
        assert list(writings_api.search_writings("Şevê")) == [writing]
        assert list(writings_api.search_writings_by_writer("Şêxmûs")) == [writing]
        assert list(writings_api.get_writings_by_writer_exact("Şêxmûs Sefer", "KMR")) == [writing]
        assert list(writings_api.filter_writings(writer="Şêx")) == [writing]


@ddt.ddt
class TestSearchWritings(WritingsTestCase):

    @ddt.data(
        ("folklore", ["both"]),
        ("KMR", ["both"]),
        ("dîroka", ["kurmanji"]),
        ("kurdistan", ["sorani", "kurmanji"]),
        ("song", ["both"]),
        ("alpha", ["kurmanji"]),
    )
    @ddt.unpack
    def test_search(self, text, expected):
        assert list(writings_api.search_writings(text)) == [getattr(self, name) for name in expected]

    def test_no_duplicates(self):
        # "songs" is on both of this writing's tag sets, "stories" doesn't match
        assert writings_api.search_writings("so").filter(pk=self.both.pk).count() == 1

    @ddt.data(
        ("mukhtar", None, ["sorani"]),
        ("BEDIR", None, ["kurmanji"]),
        ("ad", None, ["sorani", "kurmanji"]),
        ("hemin", "CKB", ["both"]),
        ("hemin", "kmr", []),
        ("cegerx", "KMR", ["both"]),
    )
    @ddt.unpack
    def test_by_writer(self, text, language, expected):
        results = writings_api.search_writings_by_writer(text, language)
        assert list(results) == [getattr(self, name) for name in expected]

    def test_by_writer_exact(self):
        assert list(writings_api.get_writings_by_writer_exact("ahmad mukhtar", "CKB")) == [self.sorani]
        assert not writings_api.get_writings_by_writer_exact("Ahmad", "CKB")
        assert not writings_api.get_writings_by_writer_exact("Ahmad Mukhtar", "KMR")

    def test_writer_bad_language(self):
        with self.assertRaises(ValidationError):
            writings_api.search_writings_by_writer("x", "english")
        with self.assertRaises(ValidationError):
            writings_api.get_writings_by_writer_exact("x", None)

    def test_by_topic(self):
        assert list(writings_api.get_writings_by_topic("folklore")) == [self.both]
        assert list(writings_api.get_writings_by_topic(WritingTopic.HISTORICAL)) == [self.sorani]

    def test_by_institute(self):
        assert list(writings_api.get_writings_by_institute()) == [self.kurmanji, self.both]
        assert list(writings_api.get_writings_by_institute(False)) == [self.sorani]

    @ddt.data(
        ({}, ["sorani", "kurmanji", "both"]),
        ({"topic": "LINGUISTICS"}, ["kurmanji"]),
        ({"institute_only": True}, ["kurmanji", "both"]),
        ({"institute_only": False}, ["sorani", "kurmanji", "both"]),
        ({"writer": "CEGER"}, ["both"]),
        ({"topic": "FOLKLORE", "institute_only": True, "writer": "hemin"}, ["both"]),
        ({"topic": "HISTORICAL", "institute_only": True}, []),
    )
    @ddt.unpack
    def test_filter(self, kwargs, expected):
        assert list(writings_api.filter_writings(**kwargs)) == [getattr(self, name) for name in expected]

    def test_newest_first(self):
        assert list(writings_api.get_writings()) == [self.both, self.kurmanji, self.sorani]


class TestUpdateWriting(WritingsTestCase):

    def test_content_is_merged(self):
        writing = writings_api.update_writing(self.both.pk, ckb_content={"genre": "novel"})
        assert writing.genre_ckb == "novel"
        assert writing.title_ckb == "Folklore CKB"
        assert writing.writer_ckb == "Hemin"

    def test_changed_fields_logged(self):
        writings_api.update_writing(
            self.both.pk,
            kmr_content={"title": "Folklore KMR", "writer": "Cegerxwîn 2"},
            published_by_institute=False,
        )
        log = writings_api.get_writing_logs(self.both.pk).first()
        assert log.action == WritingLogAction.UPDATED
        assert log.meta == {"changed_fields": ["writer_kmr", "published_by_institute"]}

    def test_tags_replaced_per_language(self):
        writing = writings_api.update_writing(self.both.pk, tags_kmr=["epics"])
        assert [tag.name for tag in writing.tags_kmr.all()] == ["epics"]
        assert [tag.name for tag in writing.tags_ckb.all()] == ["songs"]
        assert Tag.objects.filter(name="stories").exists()

    def test_adding_language_needs_title(self):
        with self.assertRaises(ValidationError):
            writings_api.update_writing(self.sorani.pk, content_languages=["CKB", "KMR"])
        writing = writings_api.update_writing(
            self.sorani.pk, content_languages=["CKB", "KMR"], kmr_content={"title": "Dîroka"},
        )
        assert writing.content_languages == ["CKB", "KMR"]

    def test_missing(self):
        with self.assertRaises(Writing.DoesNotExist):
            writings_api.update_writing(999_999, writing_topic="OTHER")


class TestDeleteWriting(WritingsTestCase):

    @freeze_time("2024-07-01 10:00:00")
    def test_delete_leaves_one_log(self):
        writing_id = self.kurmanji.pk
        writings_api.update_writing(writing_id, writing_topic="OTHER")
        writings_api.delete_writing(writing_id, deleted_by="admin", request_id="req-9")

        assert not Writing.objects.filter(pk=writing_id).exists()
        [log] = writings_api.get_writing_logs(writing_id)
        assert log.action == WritingLogAction.DELETED
        assert log.writing is None
        assert log.writing_ref == writing_id
        assert log.actor_name == "admin"
        assert log.request_id == "req-9"
        assert log.details == "Deleted writing: Dîroka Kurdistanê"
        assert log.created_at == datetime(2024, 7, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_other_logs_untouched(self):
        writings_api.delete_writing(self.sorani.pk)
        assert WritingLog.objects.filter(writing=self.both).count() == 1

    def test_taxonomy_is_kept(self):
        writings_api.delete_writing(self.kurmanji.pk)
        assert Tag.objects.filter(name="grammar").exists()

    def test_missing(self):
        with self.assertRaises(Writing.DoesNotExist):
            writings_api.delete_writing(999_999)

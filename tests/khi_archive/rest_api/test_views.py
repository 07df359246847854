"""
Tests for the archive content REST API views
"""
from __future__ import annotations

from datetime import timedelta

import ddt  # type: ignore[import]
from django.contrib.auth import get_user_model
from django.db import IntegrityError
from rest_framework import status
from rest_framework.test import APITestCase

from khi_archive.api import accounts as accounts_api
from khi_archive.api import content as content_api
from khi_archive.api.content_models import NewsCategory, NewsSubCategory, Project, Writing, WritingLog
from khi_archive.lib.audit import utc_now
from khi_archive.rest_api.utils import Conflict
from khi_archive.rest_api.v1.views import ProjectView

User = get_user_model()

PROJECT_LIST_URL = "/khi/rest_api/v1/projects/"
PROJECT_DETAIL_URL = "/khi/rest_api/v1/projects/{pk}/"
PROJECT_MEDIA_URL = "/khi/rest_api/v1/projects/{pk}/media/"
PROJECT_SEARCH_URL = "/khi/rest_api/v1/projects/search/"
PROJECT_BY_TAG_URL = "/khi/rest_api/v1/projects/by_tag/"

WRITING_LIST_URL = "/khi/rest_api/v1/writings/"
WRITING_DETAIL_URL = "/khi/rest_api/v1/writings/{pk}/"
WRITING_BY_TAG_URL = "/khi/rest_api/v1/writings/by_tag/"
WRITING_BY_KEYWORD_URL = "/khi/rest_api/v1/writings/by_keyword/"
WRITING_BY_WRITER_URL = "/khi/rest_api/v1/writings/by_writer/"
WRITING_FILTER_URL = "/khi/rest_api/v1/writings/filter/"

NEWS_LIST_URL = "/khi/rest_api/v1/news/"
NEWS_DETAIL_URL = "/khi/rest_api/v1/news/{pk}/"
NEWS_SEARCH_URL = "/khi/rest_api/v1/news/search/"
NEWS_BY_CATEGORY_URL = "/khi/rest_api/v1/news/by_category/"

TAG_LIST_URL = "/khi/rest_api/v1/tags/"
KEYWORD_LIST_URL = "/khi/rest_api/v1/keywords/"


class TestContentViewMixin(APITestCase):
    """
    Mixin for the content views. Adds users with and without edit rights.
    """

    def setUp(self):
        super().setUp()

        self.user = User.objects.create(
            username="user",
            email="user@example.com",
        )

        self.employee = User.objects.create(
            username="employee",
            email="employee@example.com",
        )
        accounts_api.set_user_role(self.employee, accounts_api.Role.EMPLOYEE)

        self.staff = User.objects.create(
            username="staff",
            email="staff@example.com",
            is_staff=True,
        )


@ddt.ddt
class TestProjectView(TestContentViewMixin):
    """
    Test the Project view set
    """

    def setUp(self):
        super().setUp()
        self.castle = content_api.create_project(
            title="Citadel Restoration",
            project_type="restoration",
            tags=["history", "heritage"],
            media=[
                {"media_type": "IMAGE", "url": "c.png", "sort_order": 2},
                {"media_type": "IMAGE", "url": "a.png", "sort_order": 0},
                {"media_type": "VIDEO", "url": "b.mp4", "sort_order": 1},
            ],
        )
        self.recordings = content_api.create_project(
            title="Oral History Recordings",
            project_type="research",
        )

    def test_list_anonymous(self):
        response = self.client.get(PROJECT_LIST_URL)
        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 2
        assert [item["title"] for item in response.data["results"]] == [
            "Oral History Recordings",
            "Citadel Restoration",
        ]

    def test_retrieve(self):
        response = self.client.get(PROJECT_DETAIL_URL.format(pk=self.castle.pk))
        assert response.status_code == status.HTTP_200_OK
        assert response.data["title"] == "Citadel Restoration"
        assert sorted(response.data["tags"]) == ["heritage", "history"]
        assert [item["url"] for item in response.data["media"]] == ["a.png", "b.mp4", "c.png"]

    @ddt.data("999999", "abc")
    def test_retrieve_missing(self, pk):
        response = self.client.get(PROJECT_DETAIL_URL.format(pk=pk))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_anonymous(self):
        response = self.client.post(PROJECT_LIST_URL, {"title": "x", "project_type": "y"}, format="json")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["detail"] == "You need to log in to access this page"

    def test_create_without_role(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(PROJECT_LIST_URL, {"title": "x", "project_type": "y"}, format="json")
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["detail"] == "You do not have permission to access this page"

    @ddt.data("employee", "staff")
    def test_create(self, username):
        self.client.force_authenticate(user=getattr(self, username))
        response = self.client.post(
            PROJECT_LIST_URL,
            {
                "title": "Music Archive",
                "project_type": "research",
                "content_languages": ["ckb", "KMR"],
                "tags": ["music", "history"],
                "keywords": ["dengbej"],
                "media": [
                    {"media_type": "audio", "url": "song-2.mp3", "sort_order": 2},
                    {"media_type": "AUDIO", "url": "song-1.mp3", "sort_order": 1},
                ],
            },
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["created_by"] == username
        assert response.data["content_languages"] == ["CKB", "KMR"]
        assert sorted(response.data["tags"]) == ["history", "music"]
        assert [item["url"] for item in response.data["media"]] == ["song-1.mp3", "song-2.mp3"]
        # "history" was reused, not duplicated
        assert content_api.get_tags().filter(name="history").count() == 1

    @ddt.data(
        {"project_type": "research"},
        {"title": "", "project_type": "research"},
        {"title": "Bad media", "project_type": "research", "media": [{"media_type": "HOLOGRAM"}]},
        {"title": "Bad language", "project_type": "research", "content_languages": ["en"]},
    )
    def test_create_invalid(self, body):
        self.client.force_authenticate(user=self.staff)
        response = self.client.post(PROJECT_LIST_URL, body, format="json")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_partial_update(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.patch(
            PROJECT_DETAIL_URL.format(pk=self.castle.pk),
            {"title": "Citadel Restoration, Phase 2", "tags": ["heritage"]},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["title"] == "Citadel Restoration, Phase 2"
        assert response.data["tags"] == ["heritage"]
        assert response.data["updated_by"] == "employee"
        # Untouched collections survive a partial update
        assert len(response.data["media"]) == 3

    def test_delete(self):
        self.client.force_authenticate(user=self.staff)
        response = self.client.delete(PROJECT_DETAIL_URL.format(pk=self.castle.pk))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Project.objects.filter(pk=self.castle.pk).exists()

    def test_delete_without_role(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.delete(PROJECT_DETAIL_URL.format(pk=self.castle.pk))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Project.objects.filter(pk=self.castle.pk).exists()

    @ddt.data(
        ("HIST", ["Citadel Restoration", "Oral History Recordings"]),
        ("oral", ["Oral History Recordings"]),
        ("heritage", ["Citadel Restoration"]),
        ("nothing", []),
    )
    @ddt.unpack
    def test_search(self, query, expected_titles):
        response = self.client.get(PROJECT_SEARCH_URL, {"q": query})
        assert response.status_code == status.HTTP_200_OK
        assert [item["title"] for item in response.data["results"]] == expected_titles

    @ddt.data({}, {"q": ""})
    def test_search_requires_text(self, params):
        response = self.client.get(PROJECT_SEARCH_URL, params)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_by_tag(self):
        response = self.client.get(PROJECT_BY_TAG_URL, {"tag": "HISTORY"})
        assert response.status_code == status.HTTP_200_OK
        assert [item["id"] for item in response.data["results"]] == [self.castle.pk]

    def test_media(self):
        response = self.client.get(PROJECT_MEDIA_URL.format(pk=self.castle.pk))
        assert response.status_code == status.HTTP_200_OK
        assert [item["sort_order"] for item in response.data] == [0, 1, 2]

        response = self.client.get(PROJECT_MEDIA_URL.format(pk=self.castle.pk), {"type": "image"})
        assert [item["url"] for item in response.data] == ["a.png", "c.png"]

        response = self.client.get(PROJECT_MEDIA_URL.format(pk=self.castle.pk), {"type": "HOLOGRAM"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_blacklisted_token(self):
        accounts_api.blacklist_token("revoked.jwt.token", utc_now() + timedelta(hours=1))
        self.client.credentials(HTTP_AUTHORIZATION="Bearer revoked.jwt.token")
        response = self.client.get(PROJECT_LIST_URL)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["detail"] == "Token can not be verified"


class TestCallApi(APITestCase):
    """
    Errors raised by the app APIs become API errors.
    """

    def test_integrity_error_is_conflict(self):
        def clash():
            raise IntegrityError("UNIQUE constraint failed")

        with self.assertRaises(Conflict):
            ProjectView().call_api(clash)


@ddt.ddt
class TestWritingView(TestContentViewMixin):
    """
    Test the Writing view set
    """

    def setUp(self):
        super().setUp()
        self.sorani = content_api.create_writing(
            content_languages=["CKB"],
            ckb_content={"title": "مێژوو", "writer": "Mukhtar"},
            writing_topic="HISTORICAL",
            tags_ckb=["kurdistan"],
            keywords_ckb=["ottoman"],
        )
        self.kurmanji = content_api.create_writing(
            content_languages=["KMR"],
            kmr_content={"title": "Dîrok", "writer": "Bedirxan"},
            writing_topic="LINGUISTICS",
            published_by_institute=True,
            tags_kmr=["kurdistan"],
            keywords_kmr=["ottoman"],
        )

    def test_create(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            WRITING_LIST_URL,
            {
                "content_languages": ["ckb", "kmr"],
                "ckb_content": {"title": "Stran", "writer": "Hejar", "file_format": "pdf"},
                "kmr_content": {"title": "Stran KMR"},
                "writing_topic": "poetry",
                "tags_ckb": ["songs"],
            },
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content_languages"] == ["CKB", "KMR"]
        assert response.data["ckb_content"]["title"] == "Stran"
        assert response.data["ckb_content"]["file_format"] == "PDF"
        assert response.data["kmr_content"]["title"] == "Stran KMR"
        assert response.data["writing_topic"] == "POETRY"
        assert response.data["tags_ckb"] == ["songs"]
        assert response.data["tags_kmr"] == []

    def test_create_missing_title(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            WRITING_LIST_URL,
            {"content_languages": ["CKB", "KMR"], "ckb_content": {"title": "Only one"}},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "title_kmr" in response.data

    @ddt.data(
        ({"tag": "KURDISTAN", "language": "ckb"}, ["sorani"]),
        ({"tag": "kurdistan", "language": "KMR"}, ["kurmanji"]),
        ({"tag": "kurdistan"}, ["sorani", "kurmanji"]),
    )
    @ddt.unpack
    def test_by_tag(self, params, expected):
        response = self.client.get(WRITING_BY_TAG_URL, params)
        assert response.status_code == status.HTTP_200_OK
        assert [item["id"] for item in response.data["results"]] == [getattr(self, n).pk for n in expected]

    def test_by_keyword(self):
        response = self.client.get(WRITING_BY_KEYWORD_URL, {"keyword": "ottoman", "language": "KMR"})
        assert [item["id"] for item in response.data["results"]] == [self.kurmanji.pk]

        response = self.client.get(WRITING_BY_KEYWORD_URL, {"keyword": " OTTOMAN "})
        assert response.status_code == status.HTTP_200_OK
        assert [item["id"] for item in response.data["results"]] == [self.sorani.pk, self.kurmanji.pk]

    def test_bad_language(self):
        response = self.client.get(WRITING_BY_TAG_URL, {"tag": "kurdistan", "language": "english"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_by_writer(self):
        response = self.client.get(WRITING_BY_WRITER_URL, {"writer": "bedir"})
        assert [item["id"] for item in response.data["results"]] == [self.kurmanji.pk]

        response = self.client.get(WRITING_BY_WRITER_URL, {"writer": "bedir", "language": "CKB"})
        assert response.data["results"] == []

    def test_filter(self):
        response = self.client.get(WRITING_FILTER_URL, {"institute_only": "true"})
        assert [item["id"] for item in response.data["results"]] == [self.kurmanji.pk]

        response = self.client.get(WRITING_FILTER_URL, {"topic": "historical"})
        assert [item["id"] for item in response.data["results"]] == [self.sorani.pk]

        response = self.client.get(WRITING_FILTER_URL)
        assert response.data["count"] == 2

    def test_delete_is_logged(self):
        self.client.force_authenticate(user=self.staff)
        response = self.client.delete(WRITING_DETAIL_URL.format(pk=self.sorani.pk))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Writing.objects.filter(pk=self.sorani.pk).exists()
        log = WritingLog.objects.get(writing_ref=self.sorani.pk)
        assert log.action == "DELETED"
        assert log.actor_name == "staff"


class TestNewsView(TestContentViewMixin):
    """
    Test the News view set
    """

    def setUp(self):
        super().setUp()
        self.events = content_api.create_news_category("Events", "Bûyer")
        self.newroz = content_api.create_news(
            content_languages=["KMR"],
            kmr_content={"title": "Newroz pîroz be"},
            date_published="2024-03-21",
            category=self.events,
            tags_kmr=["newroz"],
            media=[
                {"media_type": "VIDEO", "url": "2.mp4", "sort_order": 2},
                {"media_type": "IMAGE", "url": "1.png", "sort_order": 1},
            ],
        )
        self.older = content_api.create_news(
            content_languages=["CKB"],
            ckb_content={"title": "Newroz 2023"},
            date_published="2023-03-21",
        )

    def test_list_newest_published_first(self):
        response = self.client.get(NEWS_LIST_URL)
        assert response.status_code == status.HTTP_200_OK
        assert [item["id"] for item in response.data["results"]] == [self.newroz.pk, self.older.pk]
        first = response.data["results"][0]
        assert first["category"]["name_ckb"] == "Events"
        assert first["kmr_content"]["title"] == "Newroz pîroz be"
        assert [item["url"] for item in first["media"]] == ["1.png", "2.mp4"]

    def test_search(self):
        response = self.client.get(NEWS_SEARCH_URL, {"q": "newroz", "language": "kmr"})
        assert [item["id"] for item in response.data["results"]] == [self.newroz.pk]

        response = self.client.get(NEWS_SEARCH_URL, {"q": "newroz", "language": "CKB"})
        assert [item["id"] for item in response.data["results"]] == [self.older.pk]

    def test_search_requires_language(self):
        response = self.client.get(NEWS_SEARCH_URL, {"q": "newroz"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_by_category(self):
        response = self.client.get(NEWS_BY_CATEGORY_URL, {"name": "bûyer", "language": "KMR"})
        assert [item["id"] for item in response.data["results"]] == [self.newroz.pk]

    def test_create(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            NEWS_LIST_URL,
            {
                "content_languages": ["CKB"],
                "ckb_content": {"title": "Exhibition", "description": "Photos"},
                "category": self.events.pk,
                "date_published": "2024-06-01",
                "tags_ckb": ["photography"],
                "media": [{"media_type": "IMAGE", "external_url": "https://example.com/a.jpg"}],
            },
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["date_published"] == "2024-06-01"
        assert response.data["category"]["id"] == self.events.pk
        assert response.data["media"][0]["external_url"] == "https://example.com/a.jpg"

    def test_create_unknown_category(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            NEWS_LIST_URL,
            {"content_languages": ["CKB"], "ckb_content": {"title": "x"}, "category": 999_999},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_needs_title_per_language(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            NEWS_LIST_URL,
            {"content_languages": ["CKB", "KMR"], "ckb_content": {"title": "Sorani only"}},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "title_kmr" in response.data

    def test_create_with_category_names(self):
        self.client.force_authenticate(user=self.employee)
        body = {
            "content_languages": ["KMR"],
            "kmr_content": {"title": "Şahiya Newrozê"},
            "category_name": {"name_ckb": "Festivals", "name_kmr": "Festîval"},
            "sub_category_name": {"name_ckb": "Newroz"},
        }
        response = self.client.post(NEWS_LIST_URL, body, format="json")
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["category"]["name_kmr"] == "Festîval"
        assert response.data["sub_category"]["name_ckb"] == "Newroz"
        category_id = response.data["category"]["id"]
        assert response.data["sub_category"]["category"] == category_id

        # The same names again reuse the rows created above
        body["category_name"] = {"name_ckb": "FESTIVALS"}
        response = self.client.post(NEWS_LIST_URL, body, format="json")
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["category"]["id"] == category_id
        assert NewsCategory.objects.filter(name_ckb="Festivals").count() == 1
        assert NewsSubCategory.objects.filter(name_ckb="Newroz").count() == 1

    def test_update_with_sub_category_name(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.patch(
            NEWS_DETAIL_URL.format(pk=self.newroz.pk),
            {"sub_category_name": {"name_ckb": "Concerts", "name_kmr": "Konser"}},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["category"]["id"] == self.events.pk
        assert response.data["sub_category"]["category"] == self.events.pk
        assert response.data["sub_category"]["name_kmr"] == "Konser"

    def test_sub_category_name_needs_a_category(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            NEWS_LIST_URL,
            {"content_languages": ["CKB"], "ckb_content": {"title": "x"}, "sub_category_name": {"name_ckb": "Loose"}},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "sub_category_name" in response.data
        assert not NewsSubCategory.objects.exists()

    def test_category_id_and_name_are_exclusive(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            NEWS_LIST_URL,
            {
                "content_languages": ["CKB"],
                "ckb_content": {"title": "x"},
                "category": self.events.pk,
                "category_name": {"name_ckb": "Events"},
            },
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "category_name" in response.data

    def test_category_name_rolls_back_with_a_failed_write(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            NEWS_LIST_URL,
            {"content_languages": ["KMR"], "ckb_content": {"title": "x"}, "category_name": {"name_ckb": "Orphaned"}},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not NewsCategory.objects.filter(name_ckb="Orphaned").exists()
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestTaxonomyViews(TestContentViewMixin):
    """
    Test the read-only Tag and Keyword lists
    """

    def setUp(self):
        super().setUp()
        content_api.resolve_tags(["history", "Heritage", "music"])
        content_api.resolve_keywords(["dengbej"])

    def test_list_tags(self):
        response = self.client.get(TAG_LIST_URL)
        assert response.status_code == status.HTTP_200_OK
        assert [item["name"] for item in response.data["results"]] == ["Heritage", "history", "music"]

    def test_search_tags(self):
        response = self.client.get(TAG_LIST_URL, {"search": "HI"})
        assert [item["name"] for item in response.data["results"]] == ["history"]

    def test_list_keywords(self):
        response = self.client.get(KEYWORD_LIST_URL, {"search": "deng"})
        assert [item["name"] for item in response.data["results"]] == ["dengbej"]

    def test_read_only(self):
        self.client.force_authenticate(user=self.staff)
        response = self.client.post(TAG_LIST_URL, {"name": "new"}, format="json")
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

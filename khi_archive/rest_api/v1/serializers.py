"""
API Serializers for archive content
"""
from __future__ import annotations

from rest_framework import serializers

from khi_archive.apps.news.models import News, NewsCategory, NewsMedia, NewsSubCategory
from khi_archive.apps.projects.models import Project, ProjectMedia
from khi_archive.apps.taxonomy.models import Keyword, Tag
from khi_archive.apps.writings.models import CONTENT_FIELDS, Writing, WritingFileFormat, WritingTopic
from khi_archive.lib.choices import Language, MediaType


class LanguageField(serializers.Field):
    """
    A ``Language``, written as "CKB" or "KMR".

    Input is case-insensitive and may have surrounding whitespace.
    """
    default_error_messages = {
        "invalid": "Unknown language: {value!r}. Expected one of {choices}.",
    }

    def to_representation(self, value) -> str:
        return Language(value).value

    def to_internal_value(self, data) -> Language:
        try:
            language = Language.parse(data)
        except ValueError:
            language = None
        if language is None:
            self.fail("invalid", value=data, choices=", ".join(Language.values))
        return language


class UpperChoiceField(serializers.ChoiceField):
    """
    ChoiceField that accepts any casing of its (uppercase) choices.
    """
    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().upper()
        return super().to_internal_value(data)


def _name_list(max_length: int) -> serializers.ListField:
    return serializers.ListField(
        child=serializers.CharField(max_length=max_length, allow_blank=True),
        required=False,
    )


def _names() -> serializers.SlugRelatedField:
    return serializers.SlugRelatedField(slug_field="name", many=True, read_only=True)


# Query parameters

class SearchQueryParamsSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Serializer for the query params of the search views. ``q`` may not be blank.
    """
    q = serializers.CharField(allow_blank=False)
    language = LanguageField(required=False)


class NameQueryParamsSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Serializer for the query params of the exact-name lookups.
    """
    name = serializers.CharField(allow_blank=False)
    language = LanguageField(required=False)


class MediaQueryParamsSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    type = UpperChoiceField(choices=MediaType.choices, required=False)


class WritingFilterQueryParamsSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    topic = UpperChoiceField(choices=WritingTopic.choices, required=False)
    institute_only = serializers.BooleanField(required=False, default=None, allow_null=True)
    writer = serializers.CharField(required=False, allow_blank=True)


# Taxonomy

class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["id", "name"]


class KeywordSerializer(serializers.ModelSerializer):
    class Meta:
        model = Keyword
        fields = ["id", "name"]


# Projects

class ProjectMediaSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProjectMedia
        fields = ["id", "media_type", "url", "caption", "sort_order"]


class ProjectMediaInputSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    media_type = UpperChoiceField(choices=MediaType.choices)
    url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    caption = serializers.CharField(max_length=255, required=False, allow_blank=True)
    sort_order = serializers.IntegerField(required=False)


class ProjectSerializer(serializers.ModelSerializer):
    """
    Serializer for the Project model, with its tags, keywords and media.
    """
    content_languages = serializers.ListField(child=LanguageField(), read_only=True)
    tags = _names()
    keywords = _names()
    media = ProjectMediaSerializer(many=True, read_only=True)

    class Meta:
        model = Project
        fields = [
            "id",
            "title",
            "description",
            "location",
            "project_type",
            "project_date",
            "cover_url",
            "content_languages",
            "tags",
            "keywords",
            "media",
            "created_at",
            "updated_at",
            "created_by",
            "updated_by",
        ]


class ProjectWriteSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Body of a Project create or update request.
    """
    title = serializers.CharField(max_length=255)
    project_type = serializers.CharField(max_length=64)
    description = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    project_date = serializers.DateField(required=False, allow_null=True)
    cover_url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    content_languages = serializers.ListField(child=LanguageField(), required=False)
    tags = _name_list(128)
    keywords = _name_list(191)
    media = ProjectMediaInputSerializer(many=True, required=False)


# Writings

class WritingContentSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    One language's content block of a Writing.
    """
    title = serializers.CharField(max_length=300, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    writer = serializers.CharField(max_length=255, required=False, allow_blank=True)
    cover_url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    file_url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    file_format = UpperChoiceField(choices=WritingFileFormat.choices, required=False, allow_blank=True)
    file_size_bytes = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    page_count = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    genre = serializers.CharField(max_length=120, required=False, allow_blank=True)


class WritingSerializer(serializers.ModelSerializer):
    """
    Serializer for the Writing model. The per-language columns are grouped
    into ``ckb_content`` and ``kmr_content`` blocks.
    """
    content_languages = serializers.ListField(child=LanguageField(), read_only=True)
    ckb_content = serializers.SerializerMethodField()
    kmr_content = serializers.SerializerMethodField()
    tags_ckb = _names()
    tags_kmr = _names()
    keywords_ckb = _names()
    keywords_kmr = _names()

    class Meta:
        model = Writing
        fields = [
            "id",
            "content_languages",
            "ckb_content",
            "kmr_content",
            "writing_topic",
            "published_by_institute",
            "tags_ckb",
            "tags_kmr",
            "keywords_ckb",
            "keywords_kmr",
            "created_at",
            "updated_at",
            "created_by",
            "updated_by",
        ]

    def _content(self, writing: Writing, language: Language) -> dict:
        return {name: getattr(writing, f"{name}_{language.suffix}") for name in CONTENT_FIELDS}

    def get_ckb_content(self, writing: Writing) -> dict:
        return self._content(writing, Language.CKB)

    def get_kmr_content(self, writing: Writing) -> dict:
        return self._content(writing, Language.KMR)


class WritingWriteSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Body of a Writing create or update request.
    """
    content_languages = serializers.ListField(child=LanguageField())
    ckb_content = WritingContentSerializer(required=False)
    kmr_content = WritingContentSerializer(required=False)
    writing_topic = UpperChoiceField(choices=WritingTopic.choices, required=False, allow_blank=True)
    published_by_institute = serializers.BooleanField(required=False)
    tags_ckb = _name_list(128)
    tags_kmr = _name_list(128)
    keywords_ckb = _name_list(191)
    keywords_kmr = _name_list(191)


# News

class NewsCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = NewsCategory
        fields = ["id", "name_ckb", "name_kmr"]


class NewsSubCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = NewsSubCategory
        fields = ["id", "category", "name_ckb", "name_kmr"]


class NewsMediaSerializer(serializers.ModelSerializer):
    class Meta:
        model = NewsMedia
        fields = ["id", "media_type", "url", "external_url", "embed_url", "sort_order", "created_at"]


class NewsMediaInputSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    media_type = UpperChoiceField(choices=MediaType.choices)
    url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    external_url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    embed_url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    sort_order = serializers.IntegerField(required=False)


class NewsContentSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    title = serializers.CharField(max_length=300, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)


class NewsCategoryNameSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    A category or sub-category given by name, created if it doesn't exist yet.
    """
    name_ckb = serializers.CharField(max_length=120)
    name_kmr = serializers.CharField(max_length=120, required=False, allow_blank=True)


class NewsSerializer(serializers.ModelSerializer):
    """
    Serializer for the News model. The per-language columns are grouped into
    ``ckb_content`` and ``kmr_content`` blocks.
    """
    content_languages = serializers.ListField(child=LanguageField(), read_only=True)
    ckb_content = serializers.SerializerMethodField()
    kmr_content = serializers.SerializerMethodField()
    category = NewsCategorySerializer(read_only=True)
    sub_category = NewsSubCategorySerializer(read_only=True)
    tags_ckb = _names()
    tags_kmr = _names()
    keywords_ckb = _names()
    keywords_kmr = _names()
    media = NewsMediaSerializer(many=True, read_only=True)

    class Meta:
        model = News
        fields = [
            "id",
            "cover_url",
            "date_published",
            "category",
            "sub_category",
            "content_languages",
            "ckb_content",
            "kmr_content",
            "tags_ckb",
            "tags_kmr",
            "keywords_ckb",
            "keywords_kmr",
            "media",
            "created_at",
            "updated_at",
            "created_by",
            "updated_by",
        ]

    def get_ckb_content(self, news: News) -> dict:
        return {"title": news.title_ckb, "description": news.description_ckb}

    def get_kmr_content(self, news: News) -> dict:
        return {"title": news.title_kmr, "description": news.description_kmr}


class NewsWriteSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Body of a News create or update request.

    A category can be picked by id (``category``) or by name (``category_name``),
    and likewise for the sub-category.
    """
    content_languages = serializers.ListField(child=LanguageField())
    ckb_content = NewsContentSerializer(required=False)
    kmr_content = NewsContentSerializer(required=False)
    cover_url = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    date_published = serializers.DateField(required=False)
    category = serializers.PrimaryKeyRelatedField(queryset=NewsCategory.objects.all(), required=False)
    sub_category = serializers.PrimaryKeyRelatedField(queryset=NewsSubCategory.objects.all(), required=False)
    category_name = NewsCategoryNameSerializer(required=False)
    sub_category_name = NewsCategoryNameSerializer(required=False)
    tags_ckb = _name_list(128)
    tags_kmr = _name_list(128)
    keywords_ckb = _name_list(191)
    keywords_kmr = _name_list(191)
    media = NewsMediaInputSerializer(many=True, required=False)

    def validate(self, attrs):
        for field_name in ("category", "sub_category"):
            if field_name in attrs and f"{field_name}_name" in attrs:
                raise serializers.ValidationError(
                    {f"{field_name}_name": f"Give either {field_name} or {field_name}_name, not both."}
                )
        return attrs

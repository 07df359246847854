"""
Archive content API Views
"""
from __future__ import annotations

from logging import getLogger

from django.core import exceptions
from django.db import IntegrityError, models
from django.db.transaction import atomic
from django.http import Http404
from rest_framework import mixins, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet, ModelViewSet

from khi_archive.api import content as content_api
from khi_archive.api.content_models import News, Project, Writing
from khi_archive.lib.choices import Language

from ..utils import Conflict, view_auth_classes
from .permissions import ContentPermissions
from .serializers import (
    KeywordSerializer,
    MediaQueryParamsSerializer,
    NameQueryParamsSerializer,
    NewsMediaSerializer,
    NewsSerializer,
    NewsWriteSerializer,
    ProjectMediaSerializer,
    ProjectSerializer,
    ProjectWriteSerializer,
    SearchQueryParamsSerializer,
    TagSerializer,
    WritingFilterQueryParamsSerializer,
    WritingSerializer,
    WritingWriteSerializer,
)

logger = getLogger(__name__)


def _query_params(serializer_class, request: Request, **extra_names) -> dict:
    """
    Validate the request's query params, raising a 400 if they're bad.

    ``extra_names`` maps serializer field names to the query param they're
    read from, e.g. ``name="tag"`` reads ``?tag=`` into ``name``.
    """
    data = request.query_params.dict()
    for field_name, param_name in extra_names.items():
        if param_name in data:
            data[field_name] = data.pop(param_name)
    query_params = serializer_class(data=data)
    query_params.is_valid(raise_exception=True)
    return query_params.validated_data


class ContentViewMixin:
    """
    Shared plumbing for the content viewsets.

    Subclasses set ``model``, ``write_serializer_class`` and the
    ``create_fn`` / ``update_fn`` / ``delete_fn`` API functions, and implement
    ``get_item``. Writes go through the app APIs, never the serializers.
    """
    model: type[models.Model]
    permission_classes = [ContentPermissions]

    def get_item(self, pk: int):
        raise NotImplementedError  # pragma: no cover

    def get_object(self):
        """
        Return the requested item, or raise 404.
        """
        try:
            item = self.get_item(int(self.kwargs["pk"]))
        except (ValueError, self.model.DoesNotExist) as e:
            raise Http404(f"{self.model.__name__} not found") from e
        self.check_object_permissions(self.request, item)
        return item

    def call_api(self, fn, *args, **kwargs):
        """
        Call an app API function, turning its errors into API errors.
        """
        try:
            return fn(*args, **kwargs)
        except self.model.DoesNotExist as e:
            raise Http404(f"{self.model.__name__} not found") from e
        except exceptions.ObjectDoesNotExist as e:
            raise Http404(str(e)) from e
        except exceptions.ValidationError as e:
            raise ValidationError(e.message_dict if hasattr(e, "error_dict") else e.messages) from e
        except IntegrityError as e:
            logger.warning("Integrity error from %s: %s", getattr(fn, "__name__", fn), e)
            raise Conflict() from e

    def paginated(self, queryset: models.QuerySet) -> Response:
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(self.get_serializer(queryset, many=True).data)

    def write_data(self, request: Request, partial: bool) -> dict:
        serializer = self.write_serializer_class(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        return dict(serializer.validated_data)

    def prepare_write_data(self, data: dict, item=None) -> dict:
        """
        Turn validated request data into keyword arguments for the write API.

        Runs in the same transaction as the write. ``item`` is None on create.
        """
        return data

    def create(self, request: Request, *args, **kwargs) -> Response:
        data = self.write_data(request, partial=False)
        with atomic():
            data = self.call_api(self.prepare_write_data, data)
            item = self.call_api(self.create_fn, **data, created_by=request.user)
        serializer = self.get_serializer(self.get_item(item.pk))
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, *args, **kwargs) -> Response:
        item = self.get_object()
        data = self.write_data(request, partial=kwargs.pop("partial", False))
        with atomic():
            data = self.call_api(self.prepare_write_data, data, item)
            item = self.call_api(self.update_fn, item.pk, **data, updated_by=request.user)
        return Response(self.get_serializer(item).data)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        item = self.get_object()
        self.call_api(self.delete_fn, item.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


@view_auth_classes
class ProjectView(ContentViewMixin, ModelViewSet):
    """
    View to list, create, retrieve, update, delete and search Projects.

    **Example Requests**
        GET    khi/rest_api/v1/projects/                       - List projects, newest first
        POST   khi/rest_api/v1/projects/                       - Create a project
        GET    khi/rest_api/v1/projects/:pk/                   - Get a project
        PATCH  khi/rest_api/v1/projects/:pk/                   - Update some fields of a project
        DELETE khi/rest_api/v1/projects/:pk/                   - Delete a project
        GET    khi/rest_api/v1/projects/search/?q=history      - Title, tag or keyword contains "history"
        GET    khi/rest_api/v1/projects/by_tag/?tag=history    - Tagged exactly "history"
        GET    khi/rest_api/v1/projects/by_keyword/?keyword=k  - Has exactly the keyword "k"
        GET    khi/rest_api/v1/projects/:pk/media/?type=IMAGE  - A project's media, in order

    **Returns**
        * 200/201/204 - Success
        * 400 - Invalid body or query parameter
        * 401 - Not authenticated (writes only)
        * 403 - Permission denied (writes only)
        * 404 - Project not found
        * 409 - Conflict with existing data
    """
    model = Project
    serializer_class = ProjectSerializer
    write_serializer_class = ProjectWriteSerializer
    create_fn = staticmethod(content_api.create_project)
    update_fn = staticmethod(content_api.update_project)
    delete_fn = staticmethod(content_api.delete_project)

    def get_queryset(self) -> models.QuerySet:
        return content_api.get_projects()

    def get_item(self, pk: int) -> Project:
        return content_api.get_project(pk)

    @action(detail=False, methods=["get"])
    def search(self, request: Request) -> Response:
        params = _query_params(SearchQueryParamsSerializer, request)
        return self.paginated(content_api.search_projects(params["q"]))

    @action(detail=False, methods=["get"])
    def by_tag(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request, name="tag")
        return self.paginated(content_api.get_projects_by_tag(params["name"]))

    @action(detail=False, methods=["get"])
    def by_keyword(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request, name="keyword")
        return self.paginated(content_api.get_projects_by_keyword(params["name"]))

    @action(detail=True, methods=["get"])
    def media(self, request: Request, **_kwargs) -> Response:
        project = self.get_object()
        params = _query_params(MediaQueryParamsSerializer, request)
        media = content_api.get_project_media(project.pk, params.get("type"))
        return Response(ProjectMediaSerializer(media, many=True).data)


@view_auth_classes
class WritingView(ContentViewMixin, ModelViewSet):
    """
    View to list, create, retrieve, update, delete and search Writings.

    **Example Requests**
        GET khi/rest_api/v1/writings/search/?q=dîrok                       - Title, tag or keyword (any language)
        GET khi/rest_api/v1/writings/by_tag/?tag=t&language=CKB            - Sorani tag is exactly "t"
        GET khi/rest_api/v1/writings/by_tag/?tag=t                         - Tag is exactly "t" in either language
        GET khi/rest_api/v1/writings/by_keyword/?keyword=k&language=KMR    - Kurmanji keyword is exactly "k"
        GET khi/rest_api/v1/writings/by_keyword/?keyword=k                 - Keyword is exactly "k" in either language
        GET khi/rest_api/v1/writings/by_writer/?writer=xani&language=KMR
        GET khi/rest_api/v1/writings/filter/?topic=POETRY&institute_only=true&writer=xani

    Without a ``language``, ``by_tag`` and ``by_keyword`` look at both
    languages. Everything else behaves like the Project views.
    """
    model = Writing
    serializer_class = WritingSerializer
    write_serializer_class = WritingWriteSerializer
    create_fn = staticmethod(content_api.create_writing)
    update_fn = staticmethod(content_api.update_writing)
    delete_fn = staticmethod(content_api.delete_writing)

    def get_queryset(self) -> models.QuerySet:
        return content_api.get_writings()

    def get_item(self, pk: int) -> Writing:
        return content_api.get_writing(pk)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        item = self.get_object()
        self.call_api(content_api.delete_writing, item.pk, deleted_by=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def search(self, request: Request) -> Response:
        params = _query_params(SearchQueryParamsSerializer, request)
        return self.paginated(content_api.search_writings(params["q"]))

    @action(detail=False, methods=["get"])
    def by_tag(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request, name="tag")
        language = params.get("language")
        if language is None:
            writings = content_api.get_writings_by_tag(params["name"])
        elif language == Language.CKB:
            writings = content_api.get_writings_by_tag_ckb(params["name"])
        else:
            writings = content_api.get_writings_by_tag_kmr(params["name"])
        return self.paginated(writings)

    @action(detail=False, methods=["get"])
    def by_keyword(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request, name="keyword")
        language = params.get("language")
        if language is None:
            writings = content_api.get_writings_by_keyword(params["name"])
        elif language == Language.CKB:
            writings = content_api.get_writings_by_keyword_ckb(params["name"])
        else:
            writings = content_api.get_writings_by_keyword_kmr(params["name"])
        return self.paginated(writings)

    @action(detail=False, methods=["get"])
    def by_writer(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request, name="writer")
        return self.paginated(
            content_api.search_writings_by_writer(params["name"], params.get("language"))
        )

    @action(detail=False, methods=["get"], url_path="filter", url_name="filter")
    def filter_writings(self, request: Request) -> Response:
        params = _query_params(WritingFilterQueryParamsSerializer, request)
        return self.paginated(
            content_api.filter_writings(
                topic=params.get("topic"),
                institute_only=params.get("institute_only"),
                writer=params.get("writer"),
            )
        )


@view_auth_classes
class NewsView(ContentViewMixin, ModelViewSet):
    """
    View to list, create, retrieve, update, delete and search News.

    News is listed most recently published first. Every search except the
    plain list needs a ``language``, since each language's content and tags
    are searched separately.

    **Example Requests**
        GET khi/rest_api/v1/news/search/?q=newroz&language=KMR
        GET khi/rest_api/v1/news/by_tag/?tag=newroz&language=KMR
        GET khi/rest_api/v1/news/by_category/?name=Events&language=CKB
        GET khi/rest_api/v1/news/by_sub_category/?name=Concerts&language=CKB
        GET khi/rest_api/v1/news/:pk/media/?type=VIDEO

    Writes may name the category instead of giving its id, e.g.
    ``"category_name": {"name_ckb": "Events", "name_kmr": "Bûyer"}``; a
    category or sub-category that doesn't exist yet is created.
    """
    model = News
    serializer_class = NewsSerializer
    write_serializer_class = NewsWriteSerializer
    create_fn = staticmethod(content_api.create_news)
    update_fn = staticmethod(content_api.update_news)
    delete_fn = staticmethod(content_api.delete_news)

    def get_queryset(self) -> models.QuerySet:
        return content_api.get_news_ordered()

    def get_item(self, pk: int) -> News:
        return content_api.get_news(pk)

    def prepare_write_data(self, data: dict, item: News | None = None) -> dict:
        category_name = data.pop("category_name", None)
        sub_category_name = data.pop("sub_category_name", None)
        if category_name is not None:
            data["category"] = content_api.get_or_create_news_category(
                category_name["name_ckb"], category_name.get("name_kmr", "")
            )
        if sub_category_name is not None:
            category = data.get("category") or (item.category if item is not None else None)
            if category is None:
                raise ValidationError({"sub_category_name": "A category is needed to add a sub-category by name."})
            data["sub_category"] = content_api.get_or_create_news_sub_category(
                category, sub_category_name["name_ckb"], sub_category_name.get("name_kmr", "")
            )
        return data

    def _language(self, params: dict):
        language = params.get("language")
        if language is None:
            raise ValidationError({"language": "This query parameter is required."})
        return language

    @action(detail=False, methods=["get"])
    def search(self, request: Request) -> Response:
        params = _query_params(SearchQueryParamsSerializer, request)
        return self.paginated(content_api.search_news(params["q"], self._language(params)))

    @action(detail=False, methods=["get"])
    def by_tag(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request, name="tag")
        return self.paginated(content_api.get_news_by_tag(params["name"], self._language(params)))

    @action(detail=False, methods=["get"])
    def by_category(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request)
        return self.paginated(content_api.get_news_by_category_name(params["name"], self._language(params)))

    @action(detail=False, methods=["get"])
    def by_sub_category(self, request: Request) -> Response:
        params = _query_params(NameQueryParamsSerializer, request)
        return self.paginated(
            content_api.get_news_by_sub_category_name(params["name"], self._language(params))
        )

    @action(detail=True, methods=["get"])
    def media(self, request: Request, **_kwargs) -> Response:
        news = self.get_object()
        params = _query_params(MediaQueryParamsSerializer, request)
        media = content_api.get_news_media(news.pk, params.get("type"))
        return Response(NewsMediaSerializer(media, many=True).data)


@view_auth_classes
class TagView(mixins.ListModelMixin, GenericViewSet):
    """
    List Tags alphabetically, optionally only those containing ``?search=``.
    """
    serializer_class = TagSerializer
    permission_classes = [AllowAny]

    def get_queryset(self) -> models.QuerySet:
        search_term = self.request.query_params.get("search", "")
        if search_term:
            return content_api.search_tags(search_term)
        return content_api.get_tags()


@view_auth_classes
class KeywordView(mixins.ListModelMixin, GenericViewSet):
    """
    List Keywords alphabetically, optionally only those containing ``?search=``.
    """
    serializer_class = KeywordSerializer
    permission_classes = [AllowAny]

    def get_queryset(self) -> models.QuerySet:
        search_term = self.request.query_params.get("search", "")
        if search_term:
            return content_api.search_keywords(search_term)
        return content_api.get_keywords()

"""
Archive content API v1 URLs.
"""

from django.urls.conf import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register("projects", views.ProjectView, basename="project")
router.register("writings", views.WritingView, basename="writing")
router.register("news", views.NewsView, basename="news")
router.register("tags", views.TagView, basename="tag")
router.register("keywords", views.KeywordView, basename="keyword")

urlpatterns = [
    path("", include(router.urls)),
]

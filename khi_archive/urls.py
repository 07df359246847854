"""
KHI Archive URLs.
"""

from django.urls import include, path

from .rest_api import urls

app_name = "khi_archive"
urlpatterns = [path("", include(urls))]

"""
Django settings for testing and development purposes
"""
from __future__ import annotations
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / {dir_name} /
BASE_DIR = Path(__file__).resolve().parents[1]


DEBUG = True

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": "dev.db",
        "USER": "",
        "PASSWORD": "",
        "HOST": "",
        "PORT": "",
    }
}

INSTALLED_APPS = (
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.messages",
    "django.contrib.sessions",
    "django.contrib.staticfiles",
    # Admin
    "django.contrib.admin",
    "django.contrib.admindocs",
    # REST API
    "rest_framework",

    # django-rules based authorization
    'rules.apps.AutodiscoverRulesConfig',
    # KHI Archive Apps
    "khi_archive.apps.taxonomy.apps.TaxonomyConfig",
    "khi_archive.apps.projects.apps.ProjectsConfig",
    "khi_archive.apps.writings.apps.WritingsConfig",
    "khi_archive.apps.news.apps.NewsConfig",
    "khi_archive.apps.accounts.apps.AccountsConfig",
)

AUTHENTICATION_BACKENDS = [
    'rules.permissions.ObjectPermissionBackend',
    'django.contrib.auth.backends.ModelBackend',
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",

    # Admin-specific
    "django.contrib.admindocs.middleware.XViewMiddleware",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ]
        },
    },
]

ROOT_URLCONF = "projects.urls"

SECRET_KEY = "insecure-secret-key"

STATIC_URL = "/static/"
STATICFILES_FINDERS = [
    "django.contrib.staticfiles.finders.FileSystemFinder",
    "django.contrib.staticfiles.finders.AppDirectoriesFinder",
]

USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "khi_archive": {"handlers": ["console"], "level": "DEBUG"},
    },
}

######################### Django Rest Framework ########################

REST_FRAMEWORK = {
    'DEFAULT_PAGINATION_CLASS': 'edx_rest_framework_extensions.paginators.DefaultPagination',
    'PAGE_SIZE': 10,
}

# Bearer tokens are issued by the authentication service; this only has to
# be able to verify them.
JWT_AUTH = {
    'JWT_AUTH_HEADER_PREFIX': 'Bearer',
    'JWT_ISSUER': 'khi-dev-issuer',
    'JWT_AUDIENCE': 'khi-dev-audience',
    'JWT_SECRET_KEY': 'insecure-jwt-secret-key',
}

########################### KHI ARCHIVE SETTINGS #######################

KHI_ARCHIVE = {
    # Storage key prefix for uploaded media; type folders go underneath.
    'MEDIA_BASE_PREFIX': 'testweb/',
}

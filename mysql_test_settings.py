"""
This is an extension of the default test_settings.py file that uses MySQL for
the backend. While the KHI Archive apps should run fine using SQLite, they
also do some MySQL-specific things around charset/collation settings: Tag and
Keyword names use a binary collation, titles use a case-insensitive one.

For the most part, you can use test_settings.py instead (that's the default if
you just run "pytest" with no arguments).

If you need a compatible MySQL server running locally, spin one up with:
docker run --rm \
    -e MYSQL_DATABASE=test_khi_db \
    -e MYSQL_USER=test_khi_user \
    -e MYSQL_PASSWORD=test_khi_pass \
    -e MYSQL_RANDOM_ROOT_PASSWORD=true \
    -p 3306:3306 mysql:8
"""

from test_settings import *

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.mysql",
        "NAME": "khi_db",
        "USER": "test_khi_user",
        "PASSWORD": "test_khi_pass",
        "HOST": "127.0.0.1",
        "PORT": "3306",
        "OPTIONS": {
            "charset": "utf8mb4"
        }
    }
}

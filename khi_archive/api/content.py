"""
This is the public API for archive content: Projects, Writings, News and the
Tags / Keywords they share.

This is the single ``api`` module that code outside of the
``khi_archive.apps.*`` package should import from. It re-exports the public
functions from the api.py modules of all content apps.
"""
# These wildcard imports are okay because these api modules declare __all__.
# pylint: disable=wildcard-import
from ..apps.news.api import *
from ..apps.projects.api import *
from ..apps.taxonomy.api import *
from ..apps.writings.api import *

"""
This is where we expose the content models that callers may want to make
foreign keys to or query directly. Callers importing this module should never
create or modify these models themselves: there are API functions in
content.py that keep tags, media and audit logs consistent.
"""
# These wildcard imports are okay because these modules declare __all__.
# pylint: disable=wildcard-import
from ..apps.news.models import *
from ..apps.projects.models import *
from ..apps.taxonomy.models import *
from ..apps.writings.models import *
from ..lib.choices import Language, MediaType

"""
Shared FastAPI dependencies.
"""
from datetime import date

from school_admin.core.config import settings
from school_admin.utils.time_utils import local_today


def get_today() -> date:
    """Dependency for the school's current local date."""
    return local_today(settings.timezone)

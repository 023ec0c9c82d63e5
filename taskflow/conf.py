"""Settings for taskflow, read from django.conf.settings with defaults.

All names are prefixed with ``TASKFLOW_``::

    TASKFLOW_UPDATE_ACCESS_LEVEL = AccessLevel.YELLOW
    TASKFLOW_MOVE_ACCESS_LEVEL = AccessLevel.RED
    TASKFLOW_PAGE_SIZE = 20
    TASKFLOW_GROUP_PREFIX = 'taskflow_project'
    TASKFLOW_URL_PREFIX = 'ws/'
"""
from django.conf import settings


def update_access_level():
    from .models import AccessLevel
    return AccessLevel(
        getattr(settings, 'TASKFLOW_UPDATE_ACCESS_LEVEL', AccessLevel.YELLOW)
    )


def move_access_level():
    from .models import AccessLevel
    return AccessLevel(
        getattr(settings, 'TASKFLOW_MOVE_ACCESS_LEVEL', AccessLevel.RED)
    )


def page_size():
    return getattr(settings, 'TASKFLOW_PAGE_SIZE', 20)


def group_prefix():
    return getattr(settings, 'TASKFLOW_GROUP_PREFIX', 'taskflow_project')


def url_prefix():
    return getattr(settings, 'TASKFLOW_URL_PREFIX', 'ws/')

from django.urls import re_path
from . import conf
from .consumers import ProjectTaskConsumer


websocket_urlpatterns = [
    re_path(f'^{conf.url_prefix()}projects/(?P<project_id>[0-9]+)/tasks/$',
            ProjectTaskConsumer.as_asgi()),
]

import json
from enum import Enum
from pytz import utc
from datetime import datetime


def default_serializer(value):
    if isinstance(value, datetime):
        value = utc.normalize(value)
        value = str(value).split('+')[0]
        return f'{value}Z'
    if isinstance(value, Enum):
        return value.value
    return str(value)


def json_dumps(value):
    return json.dumps(value, default=default_serializer)


def to_wire(value):
    """Normalize a payload to plain JSON types before it goes through
    the channel layer, which only carries msgpack/JSON-friendly data"""
    return json.loads(json_dumps(value))

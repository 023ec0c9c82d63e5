import json
from datetime import datetime
from unittest import TestCase
from pytz import timezone, utc
from taskflow.models import AccessLevel
from taskflow.serialize import json_dumps, to_wire


class JsonDumpsTestCase(TestCase):

    def test_datetimes_are_utc(self):
        value = timezone('America/Sao_Paulo').localize(datetime(2024, 5, 26, 6, 5, 39))
        self.assertEqual(json.loads(json_dumps({'t': value})),
                         {'t': '2024-05-26 09:05:39Z'})

    def test_aware_utc(self):
        value = datetime(2024, 5, 26, 9, 5, 39, tzinfo=utc)
        self.assertEqual(to_wire([value]), ['2024-05-26 09:05:39Z'])

    def test_enums_use_value(self):
        self.assertEqual(to_wire({'level': AccessLevel.GREEN}), {'level': 3})

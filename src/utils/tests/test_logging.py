"""Tests for structured JSON logging."""

import json
import logging
import os
import sys
import unittest
from datetime import date
from unittest.mock import patch

from utils.logging import NOISY_LOGGERS, JSONFormatter, TextFormatter, extra_fields, setup_structured_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='adapter.mongodb.user_repository', level=logging.INFO, pathname=__file__,
        lineno=1, msg='User %s', args=('created',), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):
    def test_formats_standard_fields(self):
        data = json.loads(JSONFormatter().format(_record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'adapter.mongodb.user_repository')
        self.assertEqual(data['message'], 'User created')
        self.assertTrue(data['timestamp'].endswith('Z'))
        self.assertNotIn('lineno', data)

    def test_includes_extra_fields(self):
        data = json.loads(JSONFormatter().format(_record(userId='abc', fields=['name'])))

        self.assertEqual(data['userId'], 'abc')
        self.assertEqual(data['fields'], ['name'])

    def test_non_serializable_extra_is_stringified(self):
        data = json.loads(JSONFormatter().format(_record(error=ValueError('bad'))))

        self.assertEqual(data['error'], 'bad')

    def test_dates_are_iso_formatted(self):
        data = json.loads(JSONFormatter().format(_record(birthDate=date(1990, 5, 15))))

        self.assertEqual(data['birthDate'], '1990-05-15')

    def test_keeps_non_ascii_text(self):
        line = JSONFormatter().format(_record(name='Ana López'))

        self.assertIn('Ana López', line)

    def test_includes_exception(self):
        try:
            raise RuntimeError('kaboom')
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        self.assertIn('RuntimeError: kaboom', data['exception'])


class TestTextFormatter(unittest.TestCase):
    def test_appends_extra_fields_as_pairs(self):
        line = TextFormatter().format(_record(userId='abc', statusCode=201))

        self.assertIn('INFO adapter.mongodb.user_repository: User created', line)
        self.assertTrue(line.endswith('userId=abc statusCode=201'))

    def test_private_attributes_are_not_extra(self):
        self.assertEqual(extra_fields(_record(_hidden=1, shown=2)), {'shown': 2})


class TestSetupStructuredLogging(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._handlers, self._level = root.handlers[:], root.level

    def tearDown(self):
        root = logging.getLogger()
        root.handlers, root.level = self._handlers, self._level

    @patch.dict(os.environ, {}, clear=True)
    def test_installs_json_handler_with_level(self):
        setup_structured_logging('debug')

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)

    @patch.dict(os.environ, {'LOG_FORMAT': 'text', 'LOG_LEVEL': 'warning'})
    def test_reads_format_and_level_from_environment(self):
        handler = setup_structured_logging()

        self.assertIsInstance(handler.formatter, TextFormatter)
        self.assertEqual(logging.getLogger().level, logging.WARNING)

    def test_quiets_third_party_loggers(self):
        setup_structured_logging('debug', 'json')

        for name in NOISY_LOGGERS:
            self.assertEqual(logging.getLogger(name).level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()

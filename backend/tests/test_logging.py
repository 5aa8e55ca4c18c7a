"""Tests for the JSON log formatter and handler setup."""

import json
import logging
import sys
import unittest

from slip_parser.core.logging import JsonFormatter, configure_logging


def _record(level=logging.INFO, msg="parse_slip.start", extra=None, exc_info=None):
    record = logging.LogRecord("slip_parser.test", level, __file__, 1, msg, (), exc_info)
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return record


class JsonFormatterTests(unittest.TestCase):
    def test_event_and_extra_fields(self):
        line = JsonFormatter().format(_record(extra={"requestId": "req_1_abcde", "imageSizeKB": 3}))
        entry = json.loads(line)
        self.assertEqual(entry["event"], "parse_slip.start")
        self.assertEqual(entry["level"], "INFO")
        self.assertEqual(entry["requestId"], "req_1_abcde")
        self.assertEqual(entry["imageSizeKB"], 3)
        self.assertIn("timestamp", entry)
        self.assertNotIn("pathname", entry)

    def test_warning_level_name(self):
        entry = json.loads(JsonFormatter().format(_record(level=logging.WARNING)))
        self.assertEqual(entry["level"], "WARN")

    def test_exception_rendered_as_stack(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())
        entry = json.loads(JsonFormatter().format(record))
        self.assertIn("ValueError: boom", entry["stack"])

    def test_non_serialisable_extra_is_stringified(self):
        entry = json.loads(JsonFormatter().format(_record(extra={"obj": object()})))
        self.assertTrue(entry["obj"].startswith("<object"))


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self):
        configure_logging("INFO")

    def test_idempotent(self):
        root = logging.getLogger()
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        ours = [h for h in root.handlers if getattr(h, "_slip_parser_handler", False)]
        self.assertEqual(len(ours), 2)
        self.assertEqual(root.level, logging.DEBUG)

    def test_unknown_level_defaults_to_info(self):
        configure_logging("chatty")
        self.assertEqual(logging.getLogger().level, logging.INFO)

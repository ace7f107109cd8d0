import json
import tempfile
from pathlib import Path
import unittest

from renderguard.audit import AuditLogger, audit_event_to_json, build_audit_event
from renderguard.normalize import NO_SUBSTITUTIONS
from renderguard.pipeline import CONTROL_CHARACTER, EnvironmentalFilter
from renderguard.types import ConversionRequest, Segments


def _segments() -> Segments:
    segments = Segments()
    segment = segments.add_segment("a")
    segment.add_candidate("secret\tvalue")
    segment.add_candidate("ok")
    return segments


class AuditEventTests(unittest.TestCase):
    def test_audit_event_schema(self) -> None:
        stats = EnvironmentalFilter(default_rules=NO_SUBSTITUTIONS).run(
            ConversionRequest(), _segments()
        )
        event = build_audit_event(stats, timestamp="2024-01-01T00:00:00+00:00")
        data = json.loads(audit_event_to_json(event))

        expected_keys = {
            "timestamp",
            "segments",
            "candidates_seen",
            "removed",
            "normalized",
            "normalization_policy",
            "changed",
        }
        self.assertEqual(set(data.keys()), expected_keys)
        self.assertEqual(data["removed"], {CONTROL_CHARACTER: 1})
        self.assertTrue(data["changed"])
        self.assertNotIn("secret", audit_event_to_json(event))


class AuditLogWriterTests(unittest.TestCase):
    def test_audit_log_appends_jsonl(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "logs" / "audit.jsonl"
            logger = AuditLogger(log_path)
            environmental_filter = EnvironmentalFilter(
                default_rules=NO_SUBSTITUTIONS, audit_logger=logger
            )
            environmental_filter.rewrite(ConversionRequest(), _segments())
            environmental_filter.rewrite(ConversionRequest(), _segments())

            lines = log_path.read_text(encoding="utf-8").splitlines()
            self.assertEqual(len(lines), 2)
            data = json.loads(lines[0])
            self.assertEqual(data["candidates_seen"], 2)
            self.assertEqual(data["normalization_policy"], "DEFAULT")

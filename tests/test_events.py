"""
Tests for vmix_xml events — XML text → start/text/end event stream
stdlib only — no external dependencies
"""

import sys
import unittest
import xml.etree.ElementTree as ET
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from vmix_xml.events import (
    ElementEnd,
    ElementStart,
    Text,
    iter_events,
    local_name,
)


class TestIterEvents(unittest.TestCase):
    def test_simple_document(self):
        events = list(iter_events("<vmix><version>24</version></vmix>"))
        self.assertEqual(events, [
            ElementStart("vmix", {}),
            ElementStart("version", {}),
            Text("24"),
            ElementEnd("version"),
            ElementEnd("vmix"),
        ])

    def test_attributes_keep_source_order(self):
        events = list(iter_events('<input title="A" key="k" number="1"/>'))
        start = events[0]
        self.assertIsInstance(start, ElementStart)
        self.assertEqual(list(start.attributes.keys()), ["title", "key", "number"])

    def test_entities_unescaped(self):
        events = list(iter_events('<input title="Cam &amp; Mic">a &lt; b</input>'))
        self.assertEqual(events[0].attributes["title"], "Cam & Mic")
        self.assertEqual(events[1], Text("a < b"))

    def test_no_text_event_for_empty_element(self):
        events = list(iter_events("<vmix><overlays/></vmix>"))
        self.assertFalse(any(isinstance(e, Text) for e in events))

    def test_text_emitted_before_end(self):
        events = list(iter_events("<a><b>x</b></a>"))
        idx = events.index(Text("x"))
        self.assertEqual(events[idx + 1], ElementEnd("b"))

    def test_bytes_input(self):
        data = '<?xml version="1.0" encoding="utf-8"?><vmix><edition>Pro</edition></vmix>'.encode("utf-8")
        events = list(iter_events(data))
        self.assertIn(Text("Pro"), events)

    def test_namespace_stripped(self):
        events = list(iter_events('<vmix xmlns="urn:example"><version>1</version></vmix>'))
        self.assertEqual(events[0].name, "vmix")
        self.assertEqual(events[1].name, "version")

    def test_truncated_raises_parse_error(self):
        with self.assertRaises(ET.ParseError):
            list(iter_events("<vmix><input"))

    def test_empty_raises_parse_error(self):
        with self.assertRaises(ET.ParseError):
            list(iter_events(""))

    def test_wrong_type_raises(self):
        with self.assertRaises(TypeError):
            list(iter_events(None))


class TestLocalName(unittest.TestCase):
    def test_plain(self):
        self.assertEqual(local_name("input"), "input")

    def test_qualified(self):
        self.assertEqual(local_name("{urn:example}input"), "input")


if __name__ == "__main__":
    unittest.main()

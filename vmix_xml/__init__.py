"""
vmix_xml — vMix status XML → xml2js-shaped tree

Public API:
  - convert(): XML text → {"vmix": {...}}, never raises on malformed XML
  - convert_result(): same, as an explicit Converted / ParseFailed result
  - convert_file(): Load a status XML file → tree
  - convert_and_write(): Convert a status XML file and write JSON

Building blocks:
  - iter_events: XML text → ElementStart / Text / ElementEnd events
  - PathTracker, BuildContext: per-call parse state
  - assemble_tree: BuildContext → tree
  - Element, Bus, FIELD_RULES: the status document schema
"""

from .converter import (
    Converted,
    ParseFailed,
    convert,
    convert_and_write,
    convert_file,
    convert_result,
    summarize,
)
from .events import ElementEnd, ElementStart, Text, iter_events
from .builder import BuildContext, PathTracker, assemble_tree, build_context, empty_tree
from .schema import ATTRIBUTE_KEY, FIELD_RULES, ROOT_KEY, Bus, Element

__all__ = [
    "convert",
    "convert_result",
    "convert_file",
    "convert_and_write",
    "summarize",
    "Converted",
    "ParseFailed",
    "iter_events",
    "ElementStart",
    "ElementEnd",
    "Text",
    "PathTracker",
    "BuildContext",
    "build_context",
    "assemble_tree",
    "empty_tree",
    "Element",
    "Bus",
    "FIELD_RULES",
    "ROOT_KEY",
    "ATTRIBUTE_KEY",
]

"""
vmix_xml — Conversion Facade

Entry points for turning a vMix status XML document into the xml2js-shaped
tree consumed by downstream JavaScript code.

  convert(xml_text)        → dict, never raises on malformed XML
  convert_result(xml_text) → Converted | ParseFailed
  convert_file(path)       → dict
  convert_and_write(xml_path, output_path) → dict (also writes JSON)

Malformed input is not an error for callers: they receive {"vmix": {}}
and a warning is issued.
"""

from __future__ import annotations
import json
import warnings
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

from .builder import assemble_tree, build_context, empty_tree
from .events import iter_events
from .schema import ROOT_KEY


def _warn(msg: str) -> None:
    warnings.warn(f"[vmix_xml converter] {msg}", stacklevel=3)


# ---------------------------------------------------------------------------
# Result variants
# ---------------------------------------------------------------------------

@dataclass
class Converted:
    """The document parsed; ``tree`` holds the assembled status."""
    tree: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return True


@dataclass
class ParseFailed:
    """The document could not be tokenized; ``tree`` is the empty status."""
    error: str
    tree: Dict[str, Any] = field(default_factory=empty_tree)

    @property
    def ok(self) -> bool:
        return False


ConversionResult = Union[Converted, ParseFailed]


# ---------------------------------------------------------------------------
# Core
# ---------------------------------------------------------------------------

def convert_result(xml_text: Union[str, bytes]) -> ConversionResult:
    """
    Convert a status document, reporting parse failure explicitly.

    Parameters
    ----------
    xml_text : str or bytes
        One complete vMix status XML document.

    Returns
    -------
    Converted or ParseFailed
        Both carry a ``tree``; ParseFailed's is always {"vmix": {}}.

    Raises
    ------
    TypeError
        If ``xml_text`` is not str or bytes.
    """
    try:
        ctx = build_context(iter_events(xml_text))
    except (ET.ParseError, LookupError, UnicodeError) as e:
        # unknown declared encodings and unencodable str input fail like bad XML
        _warn(f"Could not parse status XML ({e}), returning empty status")
        return ParseFailed(error=str(e))
    return Converted(tree=assemble_tree(ctx))


def convert(xml_text: Union[str, bytes]) -> Dict[str, Any]:
    """Convert a status document into the xml2js-shaped tree."""
    return convert_result(xml_text).tree


# ---------------------------------------------------------------------------
# File I/O convenience
# ---------------------------------------------------------------------------

def convert_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read and convert a status XML file.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"vMix status file not found: {path}")
    return convert(path.read_bytes())


def convert_and_write(
    xml_path: Union[str, Path],
    output_path: Union[str, Path],
    indent: int = 2,
) -> Dict[str, Any]:
    """
    End-to-end: read status XML → convert → write JSON to disk.

    Parameters
    ----------
    xml_path : str or Path
        Input status XML.
    output_path : str or Path
        Where to write the JSON tree. Parent directories are created.
    indent : int
        JSON indentation.

    Returns
    -------
    dict
        The converted tree.
    """
    tree = convert_file(xml_path)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(tree, f, indent=indent, ensure_ascii=False)

    print(f"✓ Wrote vMix status: {output_path}")
    summarize(tree)
    return tree


def _entity_count(status: Dict[str, Any], collector: str, record: str) -> int:
    wrapped = status.get(collector)
    if not wrapped:
        return 0
    return len(wrapped[0].get(record, []))


def summarize(tree: Dict[str, Any]) -> None:
    """Print a human-readable summary of a converted tree."""
    status = tree.get(ROOT_KEY, {})
    if not status:
        print("vMix status: empty")
        return

    version = status.get("version", ["?"])[0]
    edition = status.get("edition", [""])[0]
    print(f"vMix status v{version} {edition}".rstrip())
    print(f"  Inputs: {_entity_count(status, 'inputs', 'input')}")
    print(f"  Overlays: {_entity_count(status, 'overlays', 'overlay')}")
    print(f"  Transitions: {_entity_count(status, 'transitions', 'transition')}")
    if "audio" in status:
        print(f"  Audio buses: {', '.join(status['audio'][0].keys())}")
    if "recording" in status:
        print("  Recording: yes")

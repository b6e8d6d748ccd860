"""
vmix_xml — XML Event Source (stdlib xml.etree.ElementTree)

Adapts ElementTree's pull parser into a flat event stream:
  ElementStart(name, attributes) → Text(content) → ElementEnd(name)

Text for an element is its leading text (before the first child), emitted
just before the element's end event. Tail text is not reported.
"""

from __future__ import annotations
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, Iterator, Union


@dataclass(frozen=True)
class ElementStart:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ElementEnd:
    name: str


@dataclass(frozen=True)
class Text:
    content: str


Event = Union[ElementStart, ElementEnd, Text]


def local_name(tag: str) -> str:
    """Strip an ElementTree '{namespace}' prefix from a tag."""
    return tag.split("}", 1)[-1] if "}" in tag else tag


def iter_events(xml_text: Union[str, bytes]) -> Iterator[Event]:
    """
    Tokenize a complete XML document into start/text/end events.

    Parameters
    ----------
    xml_text : str or bytes
        The whole document. Bytes are decoded per the XML declaration.

    Raises
    ------
    xml.etree.ElementTree.ParseError
        On malformed, truncated or empty input. Events already yielded
        before the error stay valid.
    TypeError
        If ``xml_text`` is neither str nor bytes.
    """
    if not isinstance(xml_text, (str, bytes)):
        raise TypeError(f"Expected str or bytes, got {type(xml_text).__name__}")

    parser = ET.XMLPullParser(events=("start", "end"))
    parser.feed(xml_text)
    yield from _drain(parser)
    # close() is what reports truncated documents and empty input
    parser.close()
    yield from _drain(parser)


def _drain(parser: ET.XMLPullParser) -> Iterator[Event]:
    for kind, elem in parser.read_events():
        name = local_name(elem.tag)
        if kind == "start":
            attributes = {local_name(k): v for k, v in elem.attrib.items()}
            yield ElementStart(name, attributes)
        else:
            if elem.text is not None:
                yield Text(elem.text)
            yield ElementEnd(name)

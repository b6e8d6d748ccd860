"""
vmix_xml — Status Document Schema

Declarative description of the vMix status XML:
  element name → Element enum → FieldRule (what to do with it)

Rule actions:
  - SCALAR     — capture leaf text into a one-element list
  - BOOLEAN    — capture leaf text as "true"/"false", always emitted
  - RECORD     — collect start-tag attributes into a repeated-entity list
  - BUS        — collect start-tag attributes for an audio bus (master, A–G)
  - RECORDING  — recording flag (text) plus its duration attribute
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


# ---------------------------------------------------------------------------
# Output shape constants
# ---------------------------------------------------------------------------

ROOT_KEY = "vmix"
ATTRIBUTE_KEY = "$"

TRUE_VALUES = ("true", "1")


def parse_flag(raw: Optional[str]) -> bool:
    """Interpret vMix boolean text ("True", "False", "1", ...)."""
    if raw is None:
        return False
    return raw.strip().lower() in TRUE_VALUES


def flag_text(value: bool) -> str:
    return "true" if value else "false"


# ---------------------------------------------------------------------------
# Enumerated tags
# ---------------------------------------------------------------------------

class Element(Enum):
    """Known element names of the status document."""
    VMIX = "vmix"
    VERSION = "version"
    EDITION = "edition"
    PRESET = "preset"
    ACTIVE = "active"
    PREVIEW = "preview"
    STREAMING = "streaming"
    FADE_TO_BLACK = "fadeToBlack"
    EXTERNAL = "external"
    PLAY_LIST = "playList"
    MULTI_CORDER = "multiCorder"
    FULLSCREEN = "fullscreen"
    RECORDING = "recording"
    INPUTS = "inputs"
    INPUT = "input"
    OVERLAYS = "overlays"
    OVERLAY = "overlay"
    TRANSITIONS = "transitions"
    TRANSITION = "transition"
    AUDIO = "audio"
    MASTER = "master"
    BUS_A = "busA"
    BUS_B = "busB"
    BUS_C = "busC"
    BUS_D = "busD"
    BUS_E = "busE"
    BUS_F = "busF"
    BUS_G = "busG"
    UNRECOGNIZED = ""

    @classmethod
    def lookup(cls, name: str) -> "Element":
        """Resolve a tag name; unknown names map to UNRECOGNIZED."""
        if not name:
            return cls.UNRECOGNIZED
        return _ELEMENTS_BY_NAME.get(name, cls.UNRECOGNIZED)


_ELEMENTS_BY_NAME: Dict[str, Element] = {
    e.value: e for e in Element if e is not Element.UNRECOGNIZED
}


class Bus(Enum):
    """Audio buses in output order. There is no bus H in this schema."""
    MASTER = "master"
    A = "busA"
    B = "busB"
    C = "busC"
    D = "busD"
    E = "busE"
    F = "busF"
    G = "busG"

    @property
    def key(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

class Action(Enum):
    SCALAR = "scalar"
    BOOLEAN = "boolean"
    RECORD = "record"
    BUS = "bus"
    RECORDING = "recording"


@dataclass(frozen=True)
class FieldRule:
    """How one element is handled.

    ``parent`` is the element the rule applies under; the same name anywhere
    else in the document is ignored. ``attributes`` narrows attribute capture
    to a whitelist (None keeps every attribute).
    """
    action: Action
    target: str
    parent: Element
    attributes: Optional[Tuple[str, ...]] = None


FIELD_RULES: Dict[Element, FieldRule] = {
    Element.VERSION: FieldRule(Action.SCALAR, "version", Element.VMIX),
    Element.EDITION: FieldRule(Action.SCALAR, "edition", Element.VMIX),
    Element.PRESET: FieldRule(Action.SCALAR, "preset", Element.VMIX),
    Element.ACTIVE: FieldRule(Action.SCALAR, "active", Element.VMIX),
    Element.PREVIEW: FieldRule(Action.SCALAR, "preview", Element.VMIX),
    Element.STREAMING: FieldRule(Action.BOOLEAN, "streaming", Element.VMIX),
    Element.FADE_TO_BLACK: FieldRule(Action.BOOLEAN, "fadeToBlack", Element.VMIX),
    Element.EXTERNAL: FieldRule(Action.BOOLEAN, "external", Element.VMIX),
    Element.PLAY_LIST: FieldRule(Action.BOOLEAN, "playList", Element.VMIX),
    Element.MULTI_CORDER: FieldRule(Action.BOOLEAN, "multiCorder", Element.VMIX),
    Element.FULLSCREEN: FieldRule(Action.BOOLEAN, "fullscreen", Element.VMIX),
    Element.RECORDING: FieldRule(
        Action.RECORDING, "recording", Element.VMIX, attributes=("duration",)
    ),
    Element.INPUT: FieldRule(Action.RECORD, "inputs", Element.INPUTS),
    Element.OVERLAY: FieldRule(
        Action.RECORD, "overlays", Element.OVERLAYS, attributes=("number",)
    ),
    Element.TRANSITION: FieldRule(Action.RECORD, "transitions", Element.TRANSITIONS),
    Element.MASTER: FieldRule(Action.BUS, Bus.MASTER.key, Element.AUDIO),
    Element.BUS_A: FieldRule(Action.BUS, Bus.A.key, Element.AUDIO),
    Element.BUS_B: FieldRule(Action.BUS, Bus.B.key, Element.AUDIO),
    Element.BUS_C: FieldRule(Action.BUS, Bus.C.key, Element.AUDIO),
    Element.BUS_D: FieldRule(Action.BUS, Bus.D.key, Element.AUDIO),
    Element.BUS_E: FieldRule(Action.BUS, Bus.E.key, Element.AUDIO),
    Element.BUS_F: FieldRule(Action.BUS, Bus.F.key, Element.AUDIO),
    Element.BUS_G: FieldRule(Action.BUS, Bus.G.key, Element.AUDIO),
}

# Output order of scalar fields
SCALAR_FIELDS: Tuple[str, ...] = ("version", "edition", "preset", "active", "preview")
BOOLEAN_FIELDS: Tuple[str, ...] = (
    "streaming",
    "fadeToBlack",
    "external",
    "playList",
    "multiCorder",
    "fullscreen",
)

# Repeated-entity collector → (output key, record element name)
RECORD_COLLECTORS: Tuple[Tuple[str, str], ...] = (
    ("inputs", "input"),
    ("overlays", "overlay"),
    ("transitions", "transition"),
)


def rule_for(name: str, parent: Optional[str]) -> Optional[FieldRule]:
    """Return the rule for ``name`` when it sits under the expected parent."""
    rule = FIELD_RULES.get(Element.lookup(name))
    if rule is None or parent is None:
        return None
    if Element.lookup(parent) is not rule.parent:
        return None
    return rule


def select_attributes(
    attributes: Dict[str, str], rule: FieldRule
) -> Dict[str, str]:
    """Copy attributes verbatim, narrowed to the rule's whitelist if any."""
    if rule.attributes is None:
        return dict(attributes)
    return {k: v for k, v in attributes.items() if k in rule.attributes}

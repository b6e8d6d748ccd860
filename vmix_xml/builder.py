"""
vmix_xml — Tree Builder

Consumes the event stream from events.py and builds the xml2js-shaped tree:

  PathTracker   — stack of open element names
  BuildContext  — per-conversion scalars, flags and record collectors
  handle_event  — dispatches one event through schema.FIELD_RULES
  assemble_tree — turns a finished BuildContext into {"vmix": {...}}

Output shape:
{
  "vmix": {
    "version": ["27.0.0.49"],
    "streaming": ["false"],
    "inputs": [{"input": [{"$": {"key": "...", "number": "1", ...}}]}],
    "audio": [{"master": {"$": {"volume": "100", "muted": "False"}}}],
    "recording": [{"$": {"duration": "120"}}]
  }
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .events import ElementEnd, ElementStart, Event, Text
from .schema import (
    ATTRIBUTE_KEY,
    BOOLEAN_FIELDS,
    RECORD_COLLECTORS,
    ROOT_KEY,
    SCALAR_FIELDS,
    Action,
    Bus,
    flag_text,
    parse_flag,
    rule_for,
    select_attributes,
)


# ---------------------------------------------------------------------------
# Path tracking
# ---------------------------------------------------------------------------

class PathTracker:
    """Stack of currently open element names.

    End tags are not checked against the open name: pop() always removes
    the innermost entry, and popping an empty stack does nothing.
    """

    def __init__(self) -> None:
        self._stack: List[str] = []

    def push(self, name: str) -> None:
        self._stack.append(name)

    def pop(self, name: Optional[str] = None) -> Optional[str]:
        if not self._stack:
            return None
        return self._stack.pop()

    def current(self) -> Optional[str]:
        return self._stack[-1] if self._stack else None

    def parent(self) -> Optional[str]:
        return self._stack[-2] if len(self._stack) >= 2 else None


# ---------------------------------------------------------------------------
# Build context
# ---------------------------------------------------------------------------

@dataclass
class BuildContext:
    """All accumulators for a single conversion call."""
    scalars: Dict[str, str] = field(default_factory=dict)
    flags: Dict[str, bool] = field(default_factory=dict)
    records: Dict[str, List[Dict[str, str]]] = field(
        default_factory=lambda: {key: [] for key, _ in RECORD_COLLECTORS}
    )
    buses: Dict[str, List[Dict[str, str]]] = field(default_factory=dict)
    recording: bool = False
    recording_attributes: Dict[str, str] = field(default_factory=dict)
    tracker: PathTracker = field(default_factory=PathTracker)

    def add_record(self, collector: str, attributes: Dict[str, str]) -> None:
        self.records.setdefault(collector, []).append(attributes)

    def add_bus(self, bus_key: str, attributes: Dict[str, str]) -> None:
        self.buses.setdefault(bus_key, []).append(attributes)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def handle_event(ctx: BuildContext, event: Event) -> None:
    """Apply one parse event to the build context."""
    tracker = ctx.tracker

    if isinstance(event, ElementStart):
        rule = rule_for(event.name, tracker.current())
        tracker.push(event.name)
        if rule is None:
            return
        if rule.action is Action.RECORD:
            ctx.add_record(rule.target, select_attributes(event.attributes, rule))
        elif rule.action is Action.BUS:
            ctx.add_bus(rule.target, select_attributes(event.attributes, rule))
        elif rule.action is Action.RECORDING:
            ctx.recording_attributes = select_attributes(event.attributes, rule)

    elif isinstance(event, ElementEnd):
        tracker.pop(event.name)

    elif isinstance(event, Text):
        current = tracker.current()
        if current is None:
            return
        rule = rule_for(current, tracker.parent())
        if rule is None:
            return
        if rule.action is Action.SCALAR:
            if event.content:
                ctx.scalars[rule.target] = event.content
        elif rule.action is Action.BOOLEAN:
            ctx.flags[rule.target] = parse_flag(event.content)
        elif rule.action is Action.RECORDING:
            ctx.recording = parse_flag(event.content)


def build_context(events: Iterable[Event]) -> BuildContext:
    """Run an event stream to completion into a fresh context."""
    ctx = BuildContext()
    for event in events:
        handle_event(ctx, event)
    return ctx


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def _attribute_group(attributes: Dict[str, str]) -> Dict[str, Any]:
    return {ATTRIBUTE_KEY: dict(attributes)}


def empty_tree() -> Dict[str, Any]:
    """The minimal valid result: root key mapping to an empty object."""
    return {ROOT_KEY: {}}


def assemble_tree(ctx: BuildContext) -> Dict[str, Any]:
    """Build the final {"vmix": {...}} tree from a finished context."""
    vmix: Dict[str, Any] = {}

    for name in SCALAR_FIELDS:
        value = ctx.scalars.get(name)
        if value:
            vmix[name] = [value]

    for name in BOOLEAN_FIELDS:
        vmix[name] = [flag_text(ctx.flags.get(name, False))]

    for collector, record_name in RECORD_COLLECTORS:
        records = ctx.records.get(collector, [])
        if records:
            vmix[collector] = [{record_name: [_attribute_group(r) for r in records]}]

    # First occurrence of each bus wins; buses always come out master, A..G
    audio: Dict[str, Any] = {}
    for bus in Bus:
        observed = ctx.buses.get(bus.key)
        if observed:
            audio[bus.key] = _attribute_group(observed[0])
    if audio:
        vmix["audio"] = [audio]

    if ctx.recording:
        vmix["recording"] = [_attribute_group(ctx.recording_attributes)]

    return {ROOT_KEY: vmix}

"""Field composition for trace events."""

from collections.abc import Mapping
from typing import Any

from ..clock import IClock, now
from ..config import DEFAULT_CATEGORY
from ..models import Fields, Label, Phase, TraceEvent, to_call_input


def normalize_category(value: Any) -> Any:
    """Join a sequence of category tags with commas; strings pass through."""
    if isinstance(value, (list, tuple)):
        return ",".join(str(tag) for tag in value)
    return value


def resolve_defaults(
    parent_defaults: Mapping[str, Any] | None,
    fields: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """
    Compute an emitter's default fields.

    Copies the parent's defaults, overlays `fields`, then normalises `cat`.
    `cat` and `args` fall back to DEFAULT_CATEGORY and {} when unset.
    """
    defaults = dict(parent_defaults) if parent_defaults else {}
    if fields:
        defaults.update(fields)

    if not defaults.get("cat"):
        defaults["cat"] = DEFAULT_CATEGORY
    else:
        defaults["cat"] = normalize_category(defaults["cat"])

    if not defaults.get("args"):
        defaults["args"] = {}

    return defaults


def compose_event(
    defaults: Mapping[str, Any],
    phase: Phase,
    call_input: Any = None,
    clock: IClock | None = None,
) -> TraceEvent:
    """
    Build one event from the emitter defaults and the call-site input.

    Layers, later wins: stamp (ts/pid/tid), defaults, call-site fields,
    call-site `cat` normalisation, phase marker.
    """
    stamp = clock.now() if clock is not None else now()
    event = stamp.as_fields()
    event.update(defaults)
    # Defaults are shared by every event of an emitter; hand out a copy
    if isinstance(event.get("args"), dict):
        event["args"] = dict(event["args"])
    inherited_args = event.get("args")

    resolved = to_call_input(call_input)
    if isinstance(resolved, Label):
        event["name"] = resolved.name
    elif isinstance(resolved, Fields):
        event.update(resolved.values)
        if resolved.values.get("cat"):
            event["cat"] = normalize_category(resolved.values["cat"])

    # A caller passing cat=None or args=None keeps the inherited value
    if not event.get("cat"):
        event["cat"] = defaults.get("cat") or DEFAULT_CATEGORY
    if event.get("args") is None:
        event["args"] = inherited_args if inherited_args is not None else {}

    event["ph"] = phase.value
    return event

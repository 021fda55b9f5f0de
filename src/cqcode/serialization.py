"""Message serialization: CQ code text and the JSON array form.

Two representations are supported:
- CQ code text (``dumps``): text segments are escaped, tags are rendered as
  ``[CQ:kind,key=value,...]`` with escaped values.
- Array form (``to_list``/``to_json``): ``[{"type": ..., "data": {...}}]``,
  the structured shape used by bot HTTP APIs.

Example:
    from cqcode import parse
    from cqcode.serialization import dumps, to_json, from_json

    message = parse("hi[CQ:face,id=14]")
    assert dumps(message) == "hi[CQ:face,id=14]"
    assert from_json(to_json(message)) == message

Thread Safety:
    All functions are pure; safe to call from any thread on unshared messages.

"""

import json
from typing import Any

from cqcode.config import get_codec_config
from cqcode.escape import escape
from cqcode.message import Message, Segment
from cqcode.tokens import TEXT


def dumps(message: Message, *, sort_params: bool | None = None) -> str:
    """Render a message as CQ code text.

    Segments with an empty kind are skipped. Text segments without a
    ``"text"`` key render as nothing.

    Args:
        message: Message to render
        sort_params: Emit parameters in ascending key order instead of
            insertion order (defaults to the active CodecConfig)

    Returns:
        CQ code text that parses back to an equivalent message.

    Example:
        >>> dumps(Message([Segment.text("[hi]"), Segment.of("at", qq="1,2")]))
        '&#91;hi&#93;[CQ:at,qq=1&#44;2]'
    """
    if sort_params is None:
        sort_params = get_codec_config().sort_params

    parts: list[str] = []
    for seg in message:
        if not seg.kind:
            continue
        if seg.kind == TEXT:
            content = seg.data.get(TEXT)
            if content:
                parts.append(escape(content))
            continue

        parts.append("[CQ:")
        parts.append(seg.kind)
        items = sorted(seg.data.items()) if sort_params else seg.data.items()
        for key, value in items:
            parts.append(f",{key}={escape(value, escape_comma=True)}")
        parts.append("]")
    return "".join(parts)


def to_list(message: Message) -> list[dict[str, Any]]:
    """Convert a message to the array form.

    Returns:
        List of ``{"type": kind, "data": {...}}`` dicts, one per segment.
    """
    return [{"type": seg.kind, "data": dict(seg.data)} for seg in message]


def from_list(data: list[dict[str, Any]]) -> Message:
    """Build a message from the array form.

    Raises:
        ValueError: If an item is not a dict with a string ``type`` and a
            ``data`` dict of strings.
    """
    if not isinstance(data, list):
        msg = f"Expected a list of segments, got {type(data).__name__}"
        raise ValueError(msg)

    segments: list[Segment] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            msg = f"Segment {index}: expected dict, got {type(item).__name__}"
            raise ValueError(msg)
        kind = item.get("type")
        if not isinstance(kind, str):
            msg = f"Segment {index}: missing or non-string 'type'"
            raise ValueError(msg)
        params = item.get("data")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            msg = f"Segment {index}: 'data' must be a dict"
            raise ValueError(msg)
        segments.append(Segment(kind, {str(k): _param_str(v) for k, v in params.items()}))
    return Message._adopt(segments)


def _param_str(value: Any) -> str:
    """Array-form producers send numbers and booleans as JSON scalars."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def to_json(message: Message, *, indent: int | None = None) -> str:
    """Serialize a message to a JSON array string.

    Output is deterministic (sorted keys).
    """
    return json.dumps(to_list(message), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Message:
    """Deserialize a message from a JSON array string.

    Raises:
        ValueError: If the JSON is invalid or doesn't describe a message.
    """
    return from_list(json.loads(data))


__all__ = [
    "dumps",
    "from_json",
    "from_list",
    "to_json",
    "to_list",
]

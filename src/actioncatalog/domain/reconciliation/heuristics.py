"""Substring heuristics for records that arrive without a payload."""

from __future__ import annotations

from typing import Final

ANY_CONTENT: Final[str] = "any"

_INPUT_TYPE_HINTS: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    (("text",), "WFStringContentItem"),
    (("url",), "WFURLContentItem"),
    (("image", "photo"), "WFImageContentItem"),
    (("number",), "WFNumberContentItem"),
    (("date",), "WFDateContentItem"),
    (("location",), "WFLocationContentItem"),
)

_OUTPUT_TYPE_HINTS: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    (("text",), "WFStringContentItem"),
    (("image",), "WFImageContentItem"),
    (("number",), "WFNumberContentItem"),
    (("date",), "WFDateContentItem"),
)

_PERMISSION_HINTS: Final[tuple[tuple[tuple[str, ...], str], ...]] = (
    (("notification",), "notification"),
    (("camera", "photo"), "camera"),
    (("location",), "location"),
    (("contact", "phone"), "contacts"),
    (("brightness", "volume"), "device"),
)


def _first_hint(
    lowered: str, hints: tuple[tuple[tuple[str, ...], str], ...]
) -> str | None:
    for needles, value in hints:
        if any(needle in lowered for needle in needles):
            return value
    return None


def _suffix(identifier: str) -> str:
    return identifier.rsplit(".", 1)[-1].lower()


def infer_input_types(identifier: str) -> set[str]:
    return {_first_hint(_suffix(identifier), _INPUT_TYPE_HINTS) or ANY_CONTENT}


def infer_output_types(identifier: str) -> set[str]:
    """Only getter-style actions are assumed to produce output."""

    suffix = _suffix(identifier)
    if "get" not in suffix:
        return set()
    return {_first_hint(suffix, _OUTPUT_TYPE_HINTS) or ANY_CONTENT}


def infer_permissions(identifier: str) -> str:
    return _first_hint(_suffix(identifier), _PERMISSION_HINTS) or "none"

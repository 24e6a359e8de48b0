"""Parsing of the JSON payload stored alongside imported recipes.

The ``meal_data`` column holds the external catalog object a recipe was
imported from. Depending on how the row was written it arrives as a
decoded object, a JSON string, a double-encoded JSON string, or nothing
at all. Parsing never raises: the outcome is one of three tagged results.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import orjson


@dataclass(frozen=True, slots=True)
class SidecarParsed:
    """The payload decoded to a JSON object."""

    data: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class SidecarMissing:
    """No payload was stored."""


@dataclass(frozen=True, slots=True)
class SidecarInvalid:
    """A payload was stored but is not a usable JSON object."""

    reason: str


SidecarResult = SidecarParsed | SidecarMissing | SidecarInvalid


def _decode(text: str | bytes) -> SidecarResult:
    try:
        decoded = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        return SidecarInvalid(reason=f"malformed JSON: {e}")

    # Legacy writers stored the object as a JSON string literal
    if isinstance(decoded, str):
        if not decoded.strip():
            return SidecarMissing()
        try:
            decoded = orjson.loads(decoded)
        except orjson.JSONDecodeError as e:
            return SidecarInvalid(reason=f"malformed JSON: {e}")

    if not isinstance(decoded, dict):
        return SidecarInvalid(
            reason=f"expected a JSON object, got {type(decoded).__name__}"
        )
    return SidecarParsed(data=decoded)


def parse_sidecar(raw: Any) -> SidecarResult:
    """Classify a stored recipe payload.

    Args:
        raw: Value of the ``meal_data`` column as returned by the driver.

    Returns:
        ``SidecarParsed`` with the object, ``SidecarMissing`` when nothing
        was stored, or ``SidecarInvalid`` with a short reason.
    """
    if raw is None:
        return SidecarMissing()

    if isinstance(raw, Mapping):
        return SidecarParsed(data=raw)

    if isinstance(raw, bytes | bytearray | memoryview):
        raw = bytes(raw)
        if not raw.strip():
            return SidecarMissing()
        return _decode(raw)

    if isinstance(raw, str):
        if not raw.strip():
            return SidecarMissing()
        return _decode(raw)

    return SidecarInvalid(reason=f"unsupported payload type {type(raw).__name__}")


__all__ = [
    "SidecarInvalid",
    "SidecarMissing",
    "SidecarParsed",
    "SidecarResult",
    "parse_sidecar",
]

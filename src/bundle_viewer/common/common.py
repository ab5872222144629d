"""
Shared JSON accessors used across the bundle viewer.

Bundles arrive as loosely-typed JSON: any field may be missing, ``null`` or
of the wrong shape. The accessors here never raise; a value that is not of
the expected shape reads as absent.
"""

import math
from typing import Any


def as_dict(value: Any) -> dict[str, Any]:
    """
    Return ``value`` if it is a JSON object, else an empty dict.

    :param value: Any decoded JSON value.
    :returns: The object, or ``{}``.
    """
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    """
    Return ``value`` if it is a JSON array, else an empty list.

    :param value: Any decoded JSON value.
    :returns: The array, or ``[]``.
    """
    return value if isinstance(value, list) else []


def as_str(value: Any) -> str | None:
    """Return ``value`` if it is a non-empty string, else ``None``."""
    if isinstance(value, str) and value:
        return value
    return None


def as_number(value: Any) -> float | int | None:
    """
    Return ``value`` if it is a JSON number, else ``None``.

    Booleans are not numbers here even though ``bool`` subclasses ``int``, and
    neither are ``NaN`` or the infinities.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


def first(value: Any) -> dict[str, Any]:
    """Return the first element of a JSON array if it is an object, else ``{}``."""
    items = as_list(value)
    if not items:
        return {}
    return as_dict(items[0])


def last_segment(value: str) -> str:
    """
    Return the final ``/``-separated segment of a URI or reference.

    ``"Patient/123"`` becomes ``"123"`` and
    ``"https://nrces.in/ndhm/fhir/r4/StructureDefinition/Claim"`` becomes
    ``"Claim"``.
    """
    return value.rstrip("/").rsplit("/", 1)[-1]


def first_coding_code(concept: Any) -> str | None:
    """Return the code of the first coding of a CodeableConcept, if any."""
    return as_str(first(as_dict(concept).get("coding")).get("code"))

"""
Display-ready field extraction for FHIR datatypes.

Every function here takes a raw (possibly absent or malformed) JSON value and
returns a plain string or number. None of them raise: a missing field at any
depth becomes :data:`NOT_AVAILABLE`, and numbers and money values become
``None`` or ``0`` as documented per function.

Currency and dates are formatted for the ``en_IN`` locale with Babel, which
gives Indian digit grouping (``₹1,50,000``) and long-form dates
(``15 March 2024``).
"""

from datetime import datetime
from typing import Any

from babel.dates import format_date as babel_format_date
from babel.dates import format_datetime as babel_format_datetime
from babel.numbers import format_currency as babel_format_currency

from bundle_viewer.common.common import (
    as_dict,
    as_list,
    as_number,
    as_str,
    first,
    last_segment,
)

NOT_AVAILABLE = "N/A"
DEFAULT_CURRENCY = "INR"
DEFAULT_LOCALE = "en_IN"

# Indian grouping, no forced fraction digits, at most two.
_CURRENCY_PATTERN = "¤#,##,##0.##"


def codeable_concept(concept: Any) -> str:
    """
    Render a CodeableConcept as its first coding's display text.

    Falls back to the first coding's code, then to ``"N/A"``. A concept with
    no codings is ``"N/A"`` even if it carries free text.
    """
    codings = as_list(as_dict(concept).get("coding"))
    if not codings:
        return NOT_AVAILABLE
    coding = as_dict(codings[0])
    return as_str(coding.get("display")) or as_str(coding.get("code")) or NOT_AVAILABLE


def codeable_concepts(concepts: Any) -> str:
    """Render a list of CodeableConcepts, comma separated, or ``"N/A"``."""
    rendered = [codeable_concept(concept) for concept in as_list(concepts)]
    return ", ".join(rendered) or NOT_AVAILABLE


def format_currency(amount: float | int, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format an amount as a currency string for the Indian locale.

    >>> format_currency(150000)
    '₹1,50,000'
    """
    return babel_format_currency(
        amount,
        currency,
        format=_CURRENCY_PATTERN,
        locale=DEFAULT_LOCALE,
        currency_digits=False,
    )


def money_value(money: Any) -> float | int | None:
    """Return the numeric value of a Money or Quantity, or ``None``."""
    return as_number(as_dict(money).get("value"))


def money(value: Any) -> str:
    """
    Render a Money value.

    A missing or zero value is ``"N/A"``. The money's own currency is used
    when present, otherwise INR.
    """
    data = as_dict(value)
    amount = as_number(data.get("value"))
    if not amount:
        return NOT_AVAILABLE
    currency = as_str(data.get("currency")) or DEFAULT_CURRENCY
    return format_currency(amount, currency)


def _parse_datetime(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def format_date(value: Any) -> str:
    """
    Render a FHIR date or dateTime as a long-form date, e.g. ``15 March 2024``.

    Partial dates (``2024-03``) and other unparsable strings are returned
    unchanged.
    """
    text = as_str(value)
    if text is None:
        return NOT_AVAILABLE
    parsed = _parse_datetime(text)
    if parsed is None:
        return text
    return babel_format_date(parsed.date(), format="long", locale=DEFAULT_LOCALE)


def format_datetime(value: Any) -> str:
    """Render a FHIR dateTime with the medium date-time format."""
    text = as_str(value)
    if text is None:
        return NOT_AVAILABLE
    parsed = _parse_datetime(text)
    if parsed is None:
        return text
    return babel_format_datetime(parsed, format="medium", locale=DEFAULT_LOCALE)


def period(value: Any) -> str:
    """Render a Period as ``"<start> - <end>"``; each side falls back to N/A."""
    if not isinstance(value, dict):
        return NOT_AVAILABLE
    return f"{format_date(value.get('start'))} - {format_date(value.get('end'))}"


def human_name(names: Any) -> str:
    """
    Render the first HumanName in a list.

    Prefers the name's ``text``; otherwise joins the given names and the
    family name.
    """
    name = first(names)
    if not name:
        return NOT_AVAILABLE
    text = as_str(name.get("text"))
    if text:
        return text
    given = " ".join(
        part for part in as_list(name.get("given")) if isinstance(part, str)
    )
    family = as_str(name.get("family")) or ""
    return f"{given} {family}".strip() or NOT_AVAILABLE


def identifiers(values: Any) -> str:
    """Render identifiers as ``"<system-last-segment>: <value>"`` pairs."""
    rendered = []
    for item in as_list(values):
        identifier = as_dict(item)
        if not identifier:
            continue
        system = as_str(identifier.get("system"))
        label = last_segment(system) if system else NOT_AVAILABLE
        rendered.append(f"{label}: {as_str(identifier.get('value')) or NOT_AVAILABLE}")
    return ", ".join(rendered) or NOT_AVAILABLE


def address(addresses: Any) -> str:
    """Render the first Address from a list."""
    addr = first(addresses)
    if not addr:
        return NOT_AVAILABLE
    text = as_str(addr.get("text"))
    if text:
        return text
    lines = ", ".join(line for line in as_list(addr.get("line")) if as_str(line))
    parts = [
        lines,
        as_str(addr.get("city")),
        as_str(addr.get("state")),
        as_str(addr.get("postalCode")),
    ]
    return ", ".join(part for part in parts if part) or NOT_AVAILABLE


def contact_points(contacts: Any) -> str:
    """Render ContactPoints as ``"<system>: <value>"`` pairs."""
    rendered = []
    for item in as_list(contacts):
        contact = as_dict(item)
        if not contact:
            continue
        system = as_str(contact.get("system")) or NOT_AVAILABLE
        rendered.append(f"{system}: {as_str(contact.get('value')) or NOT_AVAILABLE}")
    return ", ".join(rendered) or NOT_AVAILABLE


def reference_id(value: Any) -> str | None:
    """Return the id part of a Reference (``"Patient/123"`` -> ``"123"``)."""
    ref = as_str(as_dict(value).get("reference"))
    if ref is None:
        return None
    return last_segment(ref)


def reference(value: Any) -> str:
    """Render a Reference by id, falling back to its display text."""
    return (
        reference_id(value)
        or as_str(as_dict(value).get("display"))
        or NOT_AVAILABLE
    )


def text(value: Any) -> str:
    """Render a plain string field, ``"N/A"`` when absent."""
    return as_str(value) or NOT_AVAILABLE


def joined(values: Any) -> str:
    """Render a list of strings comma separated, ``"N/A"`` when empty."""
    return ", ".join(v for v in as_list(values) if as_str(v)) or NOT_AVAILABLE

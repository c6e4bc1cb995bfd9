"""
Request payload parsing.

A submission can arrive three ways: decoded named parameters (form post or
query string), a JSON object body, or a raw URL-encoded body that the host did
not decode. Each is captured as its own parse outcome and resolved to a single
SubmissionRequest before validation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union
from urllib.parse import unquote, unquote_plus

from ..errors import DataParseError

FIELDS = ("name", "phone", "location")


@dataclass(frozen=True)
class SubmissionRequest:
    """Canonical, unvalidated form fields. Missing keys are empty strings."""

    name: str = ""
    phone: str = ""
    location: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SubmissionRequest":
        return cls(**{key: _text(data.get(key)) for key in FIELDS})


@dataclass(frozen=True)
class NamedParams:
    params: Dict[str, str]

    def resolve(self) -> SubmissionRequest:
        return SubmissionRequest.from_mapping(self.params)


@dataclass(frozen=True)
class JsonBody:
    data: Dict[str, Any]

    def resolve(self) -> SubmissionRequest:
        return SubmissionRequest.from_mapping(self.data)


@dataclass(frozen=True)
class UrlEncodedBody:
    pairs: Dict[str, str]

    def resolve(self) -> SubmissionRequest:
        return SubmissionRequest.from_mapping(self.pairs)


ParsedPayload = Union[NamedParams, JsonBody, UrlEncodedBody]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def decode_urlencoded(body: str) -> Dict[str, str]:
    """
    Split an application/x-www-form-urlencoded body by hand.

    Segments are split on the first "=", keys are percent-decoded and values
    additionally turn "+" into a space. Later duplicates win.
    """
    pairs: Dict[str, str] = {}
    for segment in body.split("&"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        pairs[unquote(key)] = unquote_plus(value)
    return pairs


def parse_payload(params: Mapping[str, Any], body: str) -> ParsedPayload:
    """
    Pick the first parse strategy that yields data.

    Args:
        params: Already-decoded named parameters (form fields, query string).
        body: Raw request body as text, may be empty.

    Returns:
        The parse outcome.

    Raises:
        DataParseError: If no strategy yields any of the expected fields.
    """
    named = {k: _text(params[k]) for k in FIELDS if k in params}
    if named:
        return NamedParams(named)

    text = body.strip()
    if not text:
        raise DataParseError("Request carried neither form parameters nor a body")

    try:
        data = json.loads(text)
    except ValueError:
        data = None
    if isinstance(data, dict):
        return JsonBody(data)

    pairs = decode_urlencoded(text)
    if any(k in pairs for k in FIELDS):
        return UrlEncodedBody(pairs)

    raise DataParseError(f"Body is neither a JSON object nor URL-encoded form data: {text[:200]!r}")

# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Named ``format`` validators.

Each validator is a pure predicate over a value that already passed its type
check. ``applies_to`` limits a validator to the value shapes it understands;
values of other shapes are not checked by it.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from datetime import date, time
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Mapping
from urllib.parse import urlsplit

from .json_types import NUMERIC_TYPES, JsonType, classify


@dataclass(frozen=True)
class FormatValidator:
    name: str
    predicate: Callable[[Any], bool]
    applies_to: FrozenSet[JsonType] = frozenset({JsonType.STRING})

    def accepts(self, value: Any) -> bool:
        return self.predicate(value)

    def applies(self, value: Any) -> bool:
        return classify(value) in self.applies_to


# ---- date / time -------------------------------------------------------------

_DATE_TIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)
_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2}):(\d{2})$")
_OFFSET_RE = re.compile(r"^[+-](\d{2}):(\d{2})$")


def _valid_date(year: str, month: str, day: str) -> bool:
    try:
        date(int(year), int(month), int(day))
    except ValueError:
        return False
    return True


def _valid_time(hour: str, minute: str, second: str) -> bool:
    try:
        time(int(hour), int(minute), int(second))
    except ValueError:
        return False
    return True


def is_date_time(value: str) -> bool:
    m = _DATE_TIME_RE.match(value)
    if m is None:
        return False
    year, month, day, hour, minute, second, _, offset = m.groups()
    if not (_valid_date(year, month, day) and _valid_time(hour, minute, second)):
        return False
    if offset != "Z":
        offset_match = _OFFSET_RE.match(offset)
        if int(offset_match.group(1)) > 23 or int(offset_match.group(2)) > 59:
            return False
    return True


def is_date(value: str) -> bool:
    m = _DATE_RE.match(value)
    return m is not None and _valid_date(*m.groups())


def is_time(value: str) -> bool:
    m = _TIME_RE.match(value)
    return m is not None and _valid_time(*m.groups())


def is_utc_millisec(value: Any) -> bool:
    return classify(value) in NUMERIC_TYPES and value >= 0


# ---- css ---------------------------------------------------------------------

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# CSS 2.1 colour keywords
CSS_COLOR_NAMES = frozenset({
    "aqua", "black", "blue", "fuchsia", "gray", "green", "lime", "maroon", "navy",
    "olive", "orange", "purple", "red", "silver", "teal", "white", "yellow",
})

_STYLE_RE = re.compile(
    r"^\s*(?:[-A-Za-z]+\s*:\s*[^;]+;\s*)*[-A-Za-z]+\s*:\s*[^;]+;?\s*$"
)


def is_color(value: str) -> bool:
    return bool(_HEX_COLOR_RE.match(value)) or value.lower() in CSS_COLOR_NAMES


def is_style(value: str) -> bool:
    return bool(_STYLE_RE.match(value))


# ---- contact / network -------------------------------------------------------

_PHONE_RE = re.compile(
    r"^(?:(?:\+\d{1,3}[-. ]?)?\(?\d{3}\)?[-. ]?)?\d{3}[-. ]?\d{4}$"
)
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_HOST_LABEL_RE = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
_URI_CHARS_RE = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")
_URI_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")


def is_phone(value: str) -> bool:
    return bool(_PHONE_RE.match(value))


def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def is_host_name(value: str) -> bool:
    if not value or len(value) > 255:
        return False
    labels = value[:-1].split(".") if value.endswith(".") else value.split(".")
    return all(_HOST_LABEL_RE.match(label) for label in labels)


def is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def is_uri(value: str) -> bool:
    """Absolute or relative URI made only of RFC 3986 characters."""
    if not _URI_CHARS_RE.match(value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if parts.scheme and not _URI_SCHEME_RE.match(parts.scheme):
        return False
    # relative references may not carry a colon in their first segment
    if not parts.scheme and ":" in re.split(r"[/?#]", value, maxsplit=1)[0]:
        return False
    # a bare "scheme:" carries no location
    if parts.scheme and not (parts.netloc or parts.path or parts.query or parts.fragment):
        return False
    return True


def is_regex(value: str) -> bool:
    try:
        re.compile(value)
    except re.error:
        return False
    return True


def _build_registry(*validators: FormatValidator) -> Mapping[str, FormatValidator]:
    return MappingProxyType({v.name: v for v in validators})


FORMAT_VALIDATORS: Mapping[str, FormatValidator] = _build_registry(
    FormatValidator("date-time", is_date_time),
    FormatValidator("date", is_date),
    FormatValidator("time", is_time),
    FormatValidator("utc-millisec", is_utc_millisec, applies_to=NUMERIC_TYPES),
    FormatValidator("color", is_color),
    FormatValidator("style", is_style),
    FormatValidator("phone", is_phone),
    FormatValidator("uri", is_uri),
    FormatValidator("email", is_email),
    FormatValidator("ip-address", is_ipv4),
    FormatValidator("ipv6", is_ipv6),
    FormatValidator("host-name", is_host_name),
    FormatValidator("regex", is_regex),
)


def get_format_validator(name: str, registry: Mapping[str, FormatValidator] = FORMAT_VALIDATORS):
    """Return the validator for ``name``, or None when the format is unknown."""
    return registry.get(name)

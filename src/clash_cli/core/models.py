"""Tolerant views over external controller responses.

Controller versions differ in which fields they return and how they type
them. Rather than validating a schema, every accessor here returns the
field only when it has the expected type and ``None`` otherwise, so that
commands can print whatever is usable and skip the rest.

Example:
    proxies = proxy_map(client.get_proxies()) or {}
    group = ProxyEntry.from_api("GLOBAL", proxies.get("GLOBAL"))
    if group and group.now:
        print(group.now)
"""

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

SELECTOR_TYPE = "Selector"


def decode_body(body: str) -> dict[str, Any]:
    """Decode a JSON object body, falling back to an empty mapping."""
    try:
        data = json.loads(body)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def str_field(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def number_field(data: Mapping[str, Any], key: str) -> float | None:
    value = data.get(key)
    # bool is an int subclass but never a JSON number
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    # json accepts NaN, Infinity and out-of-range literals such as 1e400
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def int_field(data: Mapping[str, Any], key: str) -> int | None:
    value = number_field(data, key)
    return int(value) if value is not None else None


def proxy_map(body: Mapping[str, Any]) -> dict[str, Any] | None:
    """Return the ``proxies`` mapping of a ``GET /proxies`` body."""
    proxies = body.get("proxies")
    return proxies if isinstance(proxies, dict) else None


@dataclass
class ProxyEntry:
    """A proxy or proxy group as reported by ``GET /proxies``.

    Attributes:
        name: Key of the entry in the proxies mapping
        type: Proxy type such as ``Selector``, ``URLTest`` or ``Shadowsocks``
        now: Currently selected member, for groups
        all: Member names in server order; non-string members are kept as
            ``None`` so positions still match the server list
    """

    name: str
    type: str | None = None
    now: str | None = None
    all: list[str | None] = field(default_factory=list)

    @property
    def is_selector(self) -> bool:
        return self.type == SELECTOR_TYPE

    @classmethod
    def from_api(cls, name: str, raw: Any) -> "ProxyEntry | None":
        if not isinstance(raw, dict):
            return None
        members = raw.get("all")
        return cls(
            name=name,
            type=str_field(raw, "type"),
            now=str_field(raw, "now"),
            all=[m if isinstance(m, str) else None for m in members] if isinstance(members, list) else [],
        )


def selector_groups(proxies: Mapping[str, Any]) -> list[ProxyEntry]:
    """Return the Selector groups of a proxies mapping, in mapping order."""
    groups = []
    for name, raw in proxies.items():
        entry = ProxyEntry.from_api(name, raw)
        if entry is not None and entry.is_selector:
            groups.append(entry)
    return groups


@dataclass
class DaemonConfig:
    """Runtime settings reported by ``GET /configs``."""

    mode: str | None = None
    port: int | None = None
    socks_port: int | None = None

    @classmethod
    def from_api(cls, body: Mapping[str, Any]) -> "DaemonConfig":
        return cls(
            mode=str_field(body, "mode"),
            port=int_field(body, "port"),
            socks_port=int_field(body, "socks-port"),
        )


@dataclass
class DelayResult:
    """Outcome of a delay test.

    Attributes:
        delay: Round trip time in milliseconds, if the controller reported one
        body: Raw response body, kept for error reporting
    """

    delay: float | None
    body: str

    @classmethod
    def from_body(cls, body: str) -> "DelayResult":
        return cls(delay=number_field(decode_body(body), "delay"), body=body)


@dataclass
class VersionInfo:
    """Controller build reported by ``GET /version``."""

    version: str | None
    premium: bool
    body: str

    @classmethod
    def from_body(cls, body: str) -> "VersionInfo":
        data = decode_body(body)
        return cls(version=str_field(data, "version"), premium=data.get("premium") is True, body=body)

"""
Pure transforms over the version switcher manifest.

A history is a mapping from version name to release string. Entries are
materialized with their URL and preferred flag only when writing the manifest,
so the published ``url`` and ``preferred`` fields are never trusted on input.
"""

from __future__ import annotations

import html
import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from docswitch._errors import ParseError
from docswitch._resolver import DEV_VERSION

DEFAULT_LIMIT = 10

_NAME_PATTERN = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")


@dataclass(frozen=True)
class VersionEntry:
    """One published documentation version."""

    name: str
    release: str
    url: str
    preferred: bool = False

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.release,
            "url": self.url,
            "preferred": self.preferred,
        }


def is_valid_name(name: str) -> bool:
    return name == DEV_VERSION or _NAME_PATTERN.fullmatch(name) is not None


def sort_key(name: str) -> tuple[int, int, int]:
    """Key ordering ``dev`` first, then versions by descending ``(MAJOR, MINOR)``."""
    if name == DEV_VERSION:
        return (0, 0, 0)
    major, minor = name.split(".")
    return (1, -int(major), -int(minor))


def parse_manifest(text: str | bytes) -> dict[str, str]:
    """
    Parse a published ``versions.json`` into a mapping from name to release.

    Raises:
        ParseError: If the text is not a JSON array of ``{name, version}`` records.
    """
    try:
        records = json.loads(text)
    except ValueError as e:
        raise ParseError(f"Manifest is not valid JSON: {e}") from e
    if not isinstance(records, list):
        raise ParseError(
            f"Manifest must be a JSON array, got {type(records).__name__}."
        )
    history: dict[str, str] = {}
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise ParseError(f"Manifest entry #{i} is not an object: {record!r}")
        name, release = record.get("name"), record.get("version")
        if not isinstance(name, str) or not isinstance(release, str):
            raise ParseError(
                f"Manifest entry #{i} must have string `name` and `version`: {record!r}"
            )
        if not is_valid_name(name):
            raise ParseError(
                f"Manifest entry #{i} has invalid name `{name}` "
                f"(expected `{DEV_VERSION}` or MAJOR.MINOR)."
            )
        history[name] = release
    return history


def merge(history: Mapping[str, str], version: str, release: str) -> dict[str, str]:
    """Return a copy of ``history`` with ``version`` inserted or overwritten."""
    if not is_valid_name(version):
        raise ValueError(
            f"Invalid version name `{version}` (expected `{DEV_VERSION}` or MAJOR.MINOR)."
        )
    merged = dict(history)
    merged[version] = release
    return merged


def sort_history(history: Mapping[str, str]) -> list[tuple[str, str]]:
    return sorted(history.items(), key=lambda item: sort_key(item[0]))


def truncate(
    pairs: list[tuple[str, str]], limit: int = DEFAULT_LIMIT
) -> list[tuple[str, str]]:
    """Keep the ``limit + 1`` first pairs of a sorted history, i.e. ``dev`` and ``limit`` versions."""
    return pairs[: limit + 1]


def materialize(pairs: Iterable[tuple[str, str]], base_url: str) -> list[VersionEntry]:
    """Build manifest entries, marking the most recent non-dev version as preferred."""
    base_url = base_url.rstrip("/")
    pairs = list(pairs)
    preferred = next((name for name, _ in pairs if name != DEV_VERSION), None)
    return [
        VersionEntry(
            name=name,
            release=release,
            url=f"{base_url}/{name}/",
            preferred=name == preferred,
        )
        for name, release in pairs
    ]


def build(
    history: Mapping[str, str],
    version: str,
    release: str,
    base_url: str,
    limit: int = DEFAULT_LIMIT,
) -> list[VersionEntry]:
    """Merge, sort, truncate and materialize a history in one pass."""
    return materialize(
        truncate(sort_history(merge(history, version, release)), limit), base_url
    )


def preferred_entry(entries: Iterable[VersionEntry]) -> VersionEntry | None:
    return next((entry for entry in entries if entry.preferred), None)


def redirect_target(entries: list[VersionEntry]) -> str:
    """URL the root ``index.html`` redirects to: the preferred version, else the first entry."""
    entry = preferred_entry(entries)
    if entry is None:
        if not entries:
            raise ValueError("Cannot redirect to an empty manifest.")
        entry = entries[0]
    return entry.url


def dump_manifest(entries: Iterable[VersionEntry]) -> str:
    return (
        json.dumps(
            [entry.to_json() for entry in entries], ensure_ascii=False, indent=4
        )
        + "\n"
    )


_REDIRECT_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>Redirecting to {url}</title>
    <meta http-equiv="refresh" content="0; url={url}">
    <link rel="canonical" href="{url}">
  </head>
</html>
"""


def render_redirect(url: str) -> str:
    return _REDIRECT_TEMPLATE.format(url=html.escape(url, quote=True))

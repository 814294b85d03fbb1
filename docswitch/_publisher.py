from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import requests

from docswitch import _log
from docswitch._errors import ConfigurationError, FetchError
from docswitch._history import (
    DEFAULT_LIMIT,
    VersionEntry,
    build,
    dump_manifest,
    is_valid_name,
    parse_manifest,
    preferred_entry,
    redirect_target,
    render_redirect,
)
from docswitch._resolver import DEV_VERSION

if TYPE_CHECKING:
    from collections.abc import Mapping

MANIFEST_NAME = "versions.json"
REDIRECT_NAME = "index.html"


@dataclass(frozen=True)
class PublishResult:
    entries: list[VersionEntry]
    manifest_path: Path
    redirect_path: Path

    @property
    def preferred(self) -> VersionEntry | None:
        return preferred_entry(self.entries)


class HistoryPublisher:
    """
    Merge a documentation version into the published version switcher manifest.

    The current manifest is read from ``{base_url}/versions.json`` and the new
    ``versions.json`` and ``index.html`` are written to a local directory, ready
    to be uploaded to the root of the documentation bucket.
    """

    def __init__(
        self,
        base_url: str | None = None,
        output_dir: str | os.PathLike[str] = "artifacts",
        limit: int = DEFAULT_LIMIT,
        timeout: float | None = None,
        verbose: bool = True,
    ) -> None:
        """
        Args:
            base_url:
                Root URL of the documentation site. If not provided, it will look for the ``SPHINX_URL``
                environment variable, then for ``DOCUMENTATION_DOMAIN`` (served over HTTPS).
            output_dir: Directory where ``versions.json`` and ``index.html`` are written.
            limit: Number of released versions kept in the manifest besides ``dev``.
            timeout: Timeout in seconds of the manifest request. :obj:`None` waits indefinitely.
            verbose: If :obj:`True`, log progress.

        Raises:
            ConfigurationError: If no base URL can be found or the limit is below 1.
        """
        base_url = base_url or os.getenv("SPHINX_URL")
        if not base_url:
            domain = os.getenv("DOCUMENTATION_DOMAIN")
            if not domain:
                raise ConfigurationError(
                    "Missing documentation URL. Please set the SPHINX_URL or DOCUMENTATION_DOMAIN "
                    "environment variable or pass it as an argument."
                )
            base_url = f"https://{domain}"
        if limit < 1:
            raise ConfigurationError(f"Limit must be at least 1, got {limit}.")
        self._base_url = base_url.rstrip("/")
        self._output_dir = Path(output_dir)
        self._limit = limit
        self._timeout = timeout
        self._verbose = verbose

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def manifest_url(self) -> str:
        return f"{self._base_url}/{MANIFEST_NAME}"

    def fetch(self) -> dict[str, str]:
        """
        Retrieve the published history.

        Raises:
            FetchError: If the request fails or does not succeed.
            ParseError: If the manifest is malformed.
        """
        try:
            resp = requests.get(self.manifest_url, timeout=self._timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {self.manifest_url}: {e}") from e
        history = parse_manifest(resp.content)
        if self._verbose:
            _log.info(
                f"Fetched {len(history)} published versions from {self.manifest_url}"
            )
        return history

    def build(
        self, history: Mapping[str, str], version: str, release: str
    ) -> list[VersionEntry]:
        return build(history, version, release, self._base_url, self._limit)

    def publish(self, version: str, release: str) -> PublishResult:
        """
        Fetch the published history, merge ``version`` into it and write the new root files.

        Both files are rendered and staged under temporary names before either is moved into
        place, so a failure leaves no new root file in the output directory.

        Args:
            version: Directory name of the build, either ``dev`` or ``MAJOR.MINOR``.
            release: Full release string of the build.

        Raises:
            ConfigurationError: If ``version`` is neither ``dev`` nor ``MAJOR.MINOR``.
            FetchError: If the published manifest cannot be retrieved.
            ParseError: If the published manifest is malformed.
        """
        if not is_valid_name(version):
            raise ConfigurationError(
                f"Invalid version name `{version}` (expected `{DEV_VERSION}` or MAJOR.MINOR)."
            )
        entries = self.build(self.fetch(), version, release)
        manifest = dump_manifest(entries)
        redirect = render_redirect(redirect_target(entries))

        self._output_dir.mkdir(parents=True, exist_ok=True)
        manifest_path = self._output_dir / MANIFEST_NAME
        redirect_path = self._output_dir / REDIRECT_NAME
        _write_all({manifest_path: manifest, redirect_path: redirect})

        result = PublishResult(entries, manifest_path, redirect_path)
        if self._verbose:
            names = ", ".join(entry.name for entry in entries)
            _log.info(
                f"Wrote {manifest_path} ({len(entries)} versions: {names})\n"
                f"Wrote {redirect_path} (redirects to "
                f"{redirect_target(entries)})"
            )
        return result


def _write_all(contents: dict[Path, str]) -> None:
    staged: list[tuple[Path, Path]] = []
    try:
        for path, text in contents.items():
            tmp = path.with_name(f".{path.name}.tmp")
            staged.append((tmp, path))
            tmp.write_text(text, encoding="utf-8")
    except OSError:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise
    for tmp, path in staged:
        tmp.replace(path)

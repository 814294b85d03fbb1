from __future__ import annotations

import os
import re
from dataclasses import dataclass

from docswitch import _log
from docswitch._errors import TagParseSkip

DEV_VERSION = "dev"
DEV_RELEASE = "0.0.0+dev"

# Release candidates and prefixed tags (e.g. `v1.2.3`) are documented under `dev/`.
_TAG_PATTERN = re.compile(
    r"(?P<major>0|[1-9][0-9]*)\.(?P<minor>0|[1-9][0-9]*)(?:\.(?P<patch>0|[1-9][0-9]*))?"
)


@dataclass(frozen=True)
class Resolution:
    """Documentation directory and release string derived from a trigger event."""

    version: str
    """Directory name of the build, either ``dev`` or ``MAJOR.MINOR``."""
    release: str
    """Full release string displayed in the version switcher."""

    def as_outputs(self) -> dict[str, str]:
        """Return the CI step outputs consumed by the build and publish jobs."""
        return {
            "SPHINX_VERSION": self.version,
            "SPHINX_RELEASE": self.release,
        }


def parse_tag(tag: str) -> Resolution:
    """
    Parse a release tag of the form ``MAJOR.MINOR.PATCH`` or ``MAJOR.MINOR``.

    Args:
        tag: The tag name, e.g. ``1.4.2``.

    Returns:
        The resolution, whose version is ``MAJOR.MINOR`` and whose release is the tag itself.

    Raises:
        TagParseSkip: If the tag does not match.
    """
    match = _TAG_PATTERN.fullmatch(tag)
    if match is None:
        raise TagParseSkip(f"Tag `{tag}` is not a MAJOR.MINOR[.PATCH] release.")
    return Resolution(version=f"{match['major']}.{match['minor']}", release=tag)


def resolve(
    event_name: str | None = None,
    ref_name: str | None = None,
    verbose: bool = True,
) -> Resolution | None:
    """
    Resolve the documentation version for a trigger event.

    Args:
        event_name:
            Kind of the triggering event. If not provided, it will look for the ``GITHUB_EVENT_NAME``
            environment variable.
        ref_name:
            Tag name of a release event. If not provided, it will look for the ``GITHUB_REF_NAME``
            environment variable.
        verbose: If :obj:`True`, log the resolution.

    Returns:
        ``dev`` for every event other than a release, the parsed tag for a release, or :obj:`None`
        when the release tag is skipped.
    """
    event_name = event_name if event_name is not None else os.getenv("GITHUB_EVENT_NAME", "")
    if event_name != "release":
        resolution = Resolution(version=DEV_VERSION, release=DEV_RELEASE)
    else:
        ref_name = ref_name if ref_name is not None else os.getenv("GITHUB_REF_NAME", "")
        try:
            resolution = parse_tag(ref_name)
        except TagParseSkip as e:
            if verbose:
                _log.warn(f"{e}\nSkipping versioned documentation.")
            return None
    if verbose:
        _log.info(
            f"Resolved documentation version {resolution.version} (release {resolution.release})"
        )
    return resolution

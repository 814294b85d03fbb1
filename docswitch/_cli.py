"""Command-line entry point used by the documentation CI workflow."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Type

from docswitch import _log
from docswitch._errors import DocswitchError
from docswitch._history import DEFAULT_LIMIT
from docswitch._publisher import HistoryPublisher
from docswitch._purgers import BaseCachePurger, BunnyCachePurger
from docswitch._resolver import resolve

_PROVIDERS_MAP: dict[str, Type[BaseCachePurger]] = {
    "bunny": BunnyCachePurger,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except DocswitchError as e:
        _log.error(str(e))
        return 1


def _resolve(args: argparse.Namespace) -> int:
    resolution = resolve(args.event, args.ref, verbose=not args.quiet)
    if resolution is None:
        return 0
    lines = [f"{key}={value}" for key, value in resolution.as_outputs().items()]
    print("\n".join(lines))
    github_output = args.github_output or os.getenv("GITHUB_OUTPUT")
    if github_output:
        with open(github_output, "a", encoding="utf-8") as f:
            f.writelines(f"{line}\n" for line in lines)
    return 0


def _publish(args: argparse.Namespace) -> int:
    version = args.version or os.getenv("SPHINX_VERSION")
    release = args.release or os.getenv("SPHINX_RELEASE")
    if not version or not release:
        if not args.quiet:
            _log.warn("No documentation version resolved. Skipping publication.")
        return 0
    publisher = HistoryPublisher(
        base_url=args.base_url,
        output_dir=args.output_dir,
        limit=args.limit,
        timeout=args.timeout,
        verbose=not args.quiet,
    )
    publisher.publish(version, release)
    return 0


def _purge(args: argparse.Namespace) -> int:
    purger = _PROVIDERS_MAP[args.provider](
        target=args.pullzone,
        token=args.token,
        timeout=args.timeout,
        verbose=not args.quiet,
        disable=args.dry_run,
    )
    if purger.purge() or args.dry_run:
        return 0
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docswitch",
        description="Maintain the version switcher of a versioned documentation site.",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only log warnings and errors."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Derive the documentation version from the trigger event."
    )
    resolve_parser.add_argument(
        "--event", help="Trigger event name (default: $GITHUB_EVENT_NAME)."
    )
    resolve_parser.add_argument(
        "--ref", help="Release tag name (default: $GITHUB_REF_NAME)."
    )
    resolve_parser.add_argument(
        "--github-output",
        help="File the step outputs are appended to (default: $GITHUB_OUTPUT).",
    )
    resolve_parser.set_defaults(func=_resolve)

    publish_parser = subparsers.add_parser(
        "publish", help="Write the merged versions.json and index.html."
    )
    publish_parser.add_argument(
        "--version", help="Documentation version (default: $SPHINX_VERSION)."
    )
    publish_parser.add_argument(
        "--release", help="Release string (default: $SPHINX_RELEASE)."
    )
    publish_parser.add_argument(
        "--base-url",
        help="Documentation site URL (default: $SPHINX_URL or https://$DOCUMENTATION_DOMAIN).",
    )
    publish_parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("artifacts"),
        help="Directory the root files are written to (default: artifacts).",
    )
    publish_parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Number of released versions listed besides dev (default: {DEFAULT_LIMIT}).",
    )
    publish_parser.add_argument(
        "--timeout", type=float, help="Request timeout in seconds."
    )
    publish_parser.set_defaults(func=_publish)

    purge_parser = subparsers.add_parser("purge", help="Purge the CDN cache.")
    purge_parser.add_argument(
        "--provider", choices=sorted(_PROVIDERS_MAP), default="bunny"
    )
    purge_parser.add_argument(
        "--pullzone", help="Pull zone to purge (default: $BUNNY_PULLZONE)."
    )
    purge_parser.add_argument(
        "--token", help="Provider API key (default: $BUNNY_API_KEY)."
    )
    purge_parser.add_argument(
        "--timeout", type=float, help="Request timeout in seconds."
    )
    purge_parser.add_argument(
        "--dry-run", action="store_true", help="Do not send the purge request."
    )
    purge_parser.set_defaults(func=_purge)
    return parser

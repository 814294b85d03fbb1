from docswitch._errors import (
    ConfigurationError,
    DocswitchError,
    FetchError,
    ParseError,
    PurgeError,
    TagParseSkip,
)
from docswitch._history import VersionEntry, build, parse_manifest
from docswitch._publisher import HistoryPublisher, PublishResult
from docswitch._purgers import BaseCachePurger, BunnyCachePurger
from docswitch._resolver import Resolution, parse_tag, resolve

__all__ = [
    "BaseCachePurger",
    "BunnyCachePurger",
    "ConfigurationError",
    "DocswitchError",
    "FetchError",
    "HistoryPublisher",
    "ParseError",
    "PublishResult",
    "PurgeError",
    "Resolution",
    "TagParseSkip",
    "VersionEntry",
    "build",
    "parse_manifest",
    "parse_tag",
    "resolve",
]

__version__ = "0.1.0"

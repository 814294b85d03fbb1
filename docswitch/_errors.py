"""Exceptions raised by docswitch."""


class DocswitchError(Exception):
    """Base exception for docswitch failures."""


class TagParseSkip(DocswitchError):
    """Raised when a release tag does not name a documented version.

    This is not a failure: :func:`~docswitch.resolve` catches it and skips publishing.
    """


class FetchError(DocswitchError):
    """Raised when the published manifest cannot be retrieved."""


class ParseError(DocswitchError):
    """Raised when the published manifest is malformed."""


class PurgeError(DocswitchError):
    """Raised when the CDN cache purge request fails."""


class ConfigurationError(DocswitchError):
    """Raised when a required setting is neither passed nor found in the environment."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

from docswitch import _log


class BaseCachePurger(ABC):
    """
    Abstract base class for all CDN cache purgers.

    Provides the common configuration lookup and logging around a single purge request.
    """

    _provider: str
    """Name of the CDN provider (e.g., "Bunny")."""

    def __init__(
        self,
        target: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        verbose: bool = True,
        disable: bool = False,
    ) -> None:
        """
        Initialize the purger with default settings.

        Args:
            target:
                Default cache to purge (e.g., a pull zone ID). If not provided, it will look for an environment
                variable named `{provider}_PULLZONE` where `{provider}` is the purger's provider name in uppercase
                (e.g., `BUNNY_PULLZONE` for Bunny).
            token:
                API key. If not provided, it will look for an environment variable named `{provider}_API_KEY`
                (e.g., `BUNNY_API_KEY` for Bunny).
            timeout: Timeout in seconds of the purge request. :obj:`None` waits indefinitely.
            verbose: If :obj:`True`, log internal state changes.
            disable: If :obj:`True`, never send purge requests. This is useful for dry runs and testing.

        .. note::
           A missing API key disables the purger and logs an error.
        """
        self._verbose = verbose
        self._timeout = timeout
        self._default_target = target or os.getenv(f"{self._provider.upper()}_PULLZONE")
        self._token = token or os.getenv(f"{self._provider.upper()}_API_KEY")
        self._disable = disable
        if not self._token:
            if self._verbose:
                _log.error(
                    f"Missing {self._provider} API key. Please set the {self._provider.upper()}_API_KEY "
                    "environment variable or pass it as an argument."
                )
            self._disable = True
        elif disable and self._verbose:
            _log.info(f"{self._provider}CachePurger is disabled. No cache will be purged.")

    def purge(
        self,
        target: str | None = None,
        *,
        verbose: bool | None = None,
        disable: bool | None = None,
    ) -> bool:
        """
        Purge the CDN cache.

        Args:
            target: Override the default cache to purge.
            verbose: Override the default verbosity setting.
            disable: Override the default disable flag.

        Returns:
            :obj:`True` if a purge request was sent and accepted, :obj:`False` if it was skipped.

        Raises:
            PurgeError: If the purge request fails.
        """
        target = target or self._default_target
        verbose = verbose if verbose is not None else self._verbose
        disable = disable if disable is not None else self._disable
        if disable or not self._token:
            if verbose:
                _log.warn(f"{self._provider}CachePurger is disabled. Skipping cache purge.")
            return False
        if not target:
            if verbose:
                _log.error(
                    f"No {self._provider} pull zone specified.\nSkipping cache purge."
                )
            return False
        self._do_purge(target)
        if verbose:
            _log.info(f"Purged {self._provider} cache of pull zone {target}")
        return True

    @abstractmethod
    def _do_purge(self, target: str) -> None:
        raise NotImplementedError

from __future__ import annotations

import requests

from docswitch._errors import PurgeError
from docswitch._purgers.base import BaseCachePurger

_API_URL = "https://api.bunny.net"


class BunnyCachePurger(BaseCachePurger):
    """
    Purge the cache of a Bunny CDN pull zone.

    Example:

        .. code-block:: python

           from docswitch import BunnyCachePurger

           bunny = BunnyCachePurger(
               target="123456",  # Pull zone ID
               token="...",  # Account API key (or set BUNNY_API_KEY)
           )
           bunny.purge()
    """

    _provider = "Bunny"

    def _do_purge(self, target: str) -> None:
        url = f"{_API_URL}/pullzone/{target}/purgeCache"
        try:
            resp = requests.post(
                url,
                headers={"AccessKey": self._token or ""},
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise PurgeError(f"Failed to purge {self._provider} pull zone {target}: {e}") from e

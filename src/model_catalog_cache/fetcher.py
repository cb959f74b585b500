"""Network access to the remote multi-provider model catalog.

The upstream API returns every provider's catalog in one response; there is
no per-provider endpoint.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from . import __version__
from .errors import HttpStatusError, NetworkError, ParseError
from .logging import LogEvent, log_debug, log_warning
from .records import CatalogDocument

USER_AGENT = f"model-catalog-cache/{__version__}"


class CatalogFetcher(ABC):
    """Retrieve the full remote catalog for all providers."""

    @abstractmethod
    def fetch_all(self) -> Dict[str, CatalogDocument]:
        """Fetch every provider's catalog document.

        Raises:
            NetworkError: If the remote service cannot be reached
            HttpStatusError: If the service answers with a non-2xx status
            ParseError: If the response body is not a JSON object
        """


class HttpCatalogFetcher(CatalogFetcher):
    """Fetch the catalog over HTTP with ``requests``."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        proxy: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            url: Catalog URL (e.g. https://models.dev/api.json)
            timeout: Request timeout in seconds
            proxy: Optional proxy URL applied to http and https
            session: Optional session to reuse connections
        """
        self.url = url
        self.timeout = timeout
        self.proxies = {"http": proxy, "https": proxy} if proxy else None
        self._session = session

    def _get(self) -> requests.Response:
        getter: Any = self._session if self._session is not None else requests
        return getter.get(
            self.url,
            timeout=self.timeout,
            proxies=self.proxies,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )

    def fetch_all(self) -> Dict[str, CatalogDocument]:
        try:
            response = self._get()
        except requests.RequestException as e:
            raise NetworkError(f"Failed to fetch model catalog: {e}", url=self.url)

        try:
            if not 200 <= response.status_code < 300:
                raise HttpStatusError(
                    f"Catalog API returned HTTP {response.status_code}",
                    url=self.url,
                    status_code=response.status_code,
                )

            try:
                payload = response.json()
            except (ValueError, RecursionError) as e:
                # Deeply nested bodies exhaust the decoder's recursion limit
                raise ParseError(f"Catalog response is not valid JSON: {e}", source=self.url)
        finally:
            # Ensure response is closed to prevent resource leaks
            response.close()

        if not isinstance(payload, dict):
            raise ParseError(f"Catalog response must be a JSON object, got {type(payload).__name__}", source=self.url)

        providers: Dict[str, CatalogDocument] = {}
        for provider_key, document in payload.items():
            if isinstance(document, dict):
                providers[str(provider_key)] = document
            else:
                log_warning(LogEvent.CATALOG_FETCH, "Skipping malformed provider entry", provider=provider_key)

        log_debug(LogEvent.CATALOG_FETCH, "Fetched model catalog", url=self.url, providers=len(providers))
        return providers

"""Error types for the model catalog cache.

This module defines the error types raised by the catalog collaborators
(store, fetcher, bundled defaults). The cache itself recovers from all of
them and degrades through its fallback chain instead of surfacing them.
"""

from typing import Optional


class CatalogCacheError(Exception):
    """Base class for all catalog-cache errors.

    This is the parent class for all package-specific exceptions.
    """

    pass


class ConfigurationError(CatalogCacheError):
    """Raised for invalid configuration files or values.

    Examples:
        >>> try:
        ...     CacheConfig(fetch_timeout=-1)
        ... except ConfigurationError as e:
        ...     print(f"Bad config: {e}")
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the configuration file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class StoreError(CatalogCacheError):
    """Raised when reading or writing the persistent catalog store fails.

    Examples:
        >>> try:
        ...     store.read("opencode")
        ... except StoreError as e:
        ...     print(f"Store failure for {e.provider_key}: {e}")
    """

    def __init__(self, message: str, provider_key: Optional[str] = None) -> None:
        """Initialize store error.

        Args:
            message: Error message
            provider_key: Optional provider key whose record was being accessed
        """
        super().__init__(message)
        self.message = message
        self.provider_key = provider_key


class NetworkError(CatalogCacheError):
    """Raised when a network operation fails.

    Examples:
        >>> try:
        ...     fetcher.fetch_all()
        ... except NetworkError as e:
        ...     print(f"Network error: {e}")
    """

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        """Initialize network error.

        Args:
            message: Error message
            url: Optional URL that was being accessed
        """
        super().__init__(message)
        self.message = message
        self.url = url


class HttpStatusError(NetworkError):
    """Raised when the remote catalog answers with a non-2xx status."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        """Initialize HTTP status error.

        Args:
            message: Error message
            url: URL that was requested
            status_code: HTTP status code returned by the server
        """
        super().__init__(message, url)
        self.status_code = status_code


class ParseError(CatalogCacheError):
    """Raised when a catalog document cannot be parsed.

    The source is either the remote response body or the bundled asset.
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        """Initialize parse error.

        Args:
            message: Error message
            source: Optional description of where the document came from
        """
        super().__init__(message)
        self.message = message
        self.source = source

"""HTTP utilities for the todo API client.

Provides a pooled ``requests`` session. Requests issued by the UI bindings
are fire-and-forget, so the adapter is mounted with retries disabled.
"""

from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from utils.config import DEFAULT_MAX_IN_FLIGHT

DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
}


class SessionManager:
    """Manages an HTTP session with connection pooling."""

    def __init__(self, pool_connections: int = DEFAULT_MAX_IN_FLIGHT,
                 pool_maxsize: int = DEFAULT_MAX_IN_FLIGHT,
                 headers: Optional[Dict[str, str]] = None):
        """Initialize session manager.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections per pool; match this
                          to the number of worker threads issuing requests
            headers: Extra default headers merged over DEFAULT_HEADERS
        """
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the pooled HTTP session.

        Returns:
            requests.Session object
        """
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.headers)

            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=self.pool_connections,
                pool_maxsize=self.pool_maxsize,
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

        return self._session

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

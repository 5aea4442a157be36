"""Shared HTTP transport for all backend endpoints."""

from typing import Any, Dict, Optional

import requests

from .config import Settings
from .logger import get_logger


class MatchfeedError(Exception):
    """Base class for errors raised by the MatchFeed client."""


class TransportError(MatchfeedError):
    """A backend call failed, timed out, or returned an unusable body.

    Callers leave their state unchanged and let the user retry.
    """

    def __init__(self, message: str, endpoint: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.status = status


class MatchfeedClient:
    """Thin wrapper around a requests.Session bound to one backend root.

    No retries: every call is exactly one HTTP request.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "MatchfeedClient":
        return cls(settings.base_url, timeout=settings.timeout, session=session)

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, endpoint: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("GET", path, endpoint, params=params)

    def post(self, path: str, endpoint: str, data: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("POST", path, endpoint, data=data)

    def request(self, method: str, path: str, endpoint: str, **kwargs) -> requests.Response:
        """Issue one request with standardized error handling and logging.

        Args:
            method: HTTP method
            path: Path below the backend root (e.g. '/user-data')
            endpoint: Endpoint name for logging and metrics (e.g. 'user-data')
            **kwargs: Passed through to requests (params, data)

        Returns:
            Response object on a 2xx status

        Raises:
            TransportError: On any HTTP error, timeout, or request failure
        """
        logger = get_logger()
        url = self.url(path)
        logger.record_request_attempt(endpoint)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.record_request_failure(endpoint, f"HTTPError_{status}")
            logger.error(f"{endpoint} request failed", url=url, status=status)
            raise TransportError(f"{endpoint} request failed ({status}): {url}", endpoint, status)
        except requests.exceptions.Timeout:
            logger.record_request_failure(endpoint, "Timeout")
            logger.warning(f"{endpoint} request timed out", url=url)
            raise TransportError(f"{endpoint} request timed out. Try again later.", endpoint)
        except requests.exceptions.RequestException as e:
            logger.record_request_failure(endpoint, "RequestException")
            logger.error(f"{endpoint} request error", url=url, error=str(e))
            raise TransportError(f"{endpoint} request error: {e}", endpoint)

        logger.record_request_success(endpoint)
        logger.debug(f"{endpoint} request ok", method=method, url=url, status=resp.status_code)
        return resp

    def get_json(self, path: str, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET and decode a JSON body; an undecodable body is a TransportError."""
        resp = self.get(path, endpoint, params=params)
        try:
            return resp.json()
        except ValueError:
            get_logger().error(f"{endpoint} returned malformed JSON", url=self.url(path))
            raise TransportError(f"{endpoint} returned malformed JSON", endpoint, resp.status_code)

    def close(self) -> None:
        self.session.close()

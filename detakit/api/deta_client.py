"""
DetaKit - API Communication Module

Handles all communication with the Deta Base and Drive services via REST API.
Adds the API key header, sends requests and classifies error responses.

Author: DetaKit Project
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

import requests

from ..exceptions import (
    ErrorKind,
    DetaAPIError,
    DetaAuthError,
    DetaServerError
)

# Configure logging
logger = logging.getLogger(__name__)


API_KEY_HEADER = "X-API-Key"


@dataclass
class RequestOutput:
    """
    Result of a successful request.

    For streamed requests `body` is empty and `response` holds the live
    response whose body has not been read yet.
    """
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    response: Optional[requests.Response] = None

    def json(self) -> Any:
        """
        Decode the JSON body.

        Integers decode as floats, matching how the service stores numbers.
        """
        return json.loads(self.body, parse_int=float)


class DetaClient:
    """
    API client for one Deta service root endpoint.

    Responsibilities:
    - Build request URLs from the root endpoint
    - Attach the API key header to every request
    - Marshal JSON bodies or send raw bytes
    - Map error status codes to DetaKit errors
    """

    def __init__(self, root_endpoint: str, api_key: str):
        """
        Initialize API client.

        Args:
            root_endpoint: Fully resolved root, e.g. "https://drive.deta.sh/v1/<project>/<drive>"
            api_key: Project key sent in the X-API-Key header
        """
        self.root_endpoint = root_endpoint.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        logger.debug(f"Initialized API client for {self.root_endpoint}")

    def close(self):
        """Close the session and release resources."""
        if self.session:
            self.session.close()
            logger.debug("API client session closed")

    def request(self, method: str, path: str,
                params: Optional[Dict[str, str]] = None,
                headers: Optional[Dict[str, str]] = None,
                json_body: Any = None,
                raw_body: Optional[bytes] = None,
                content_type: Optional[str] = None,
                stream: bool = False) -> RequestOutput:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path below the root endpoint (e.g., "/items")
            params: Query parameters
            headers: Extra request headers
            json_body: Value marshalled as the JSON body
            raw_body: Bytes sent as the body; takes precedence over json_body
            content_type: Content type; defaults to application/json for JSON bodies
            stream: Keep the response body unread and return it in `response`

        Returns:
            RequestOutput for any 2xx response

        Raises:
            DetaAPIError: For 400, 404 and 409 responses
            DetaAuthError: For 401 responses
            DetaServerError: For any other non-2xx response
        """
        url = f"{self.root_endpoint}{path}"
        logger.debug(f"API request: {method} {path}")

        data = None
        if json_body is not None:
            if not content_type:
                content_type = "application/json"
            data = json.dumps(json_body).encode("utf-8")
        if raw_body is not None:
            data = raw_body

        request_headers = {}
        if content_type:
            request_headers["Content-Type"] = content_type
        if headers:
            request_headers.update(headers)
        request_headers[API_KEY_HEADER] = self.api_key

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data=data,
                headers=request_headers,
                stream=stream
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {method} {path}: {e}")
            raise

        if 200 <= response.status_code <= 299:
            if stream:
                return RequestOutput(
                    status=response.status_code,
                    headers=dict(response.headers),
                    response=response
                )
            return RequestOutput(
                status=response.status_code,
                body=response.content,
                headers=dict(response.headers)
            )

        # Error responses are always read in full
        body = response.content
        response.close()
        raise self._error_for(response.status_code, response.headers.get("Content-Type", ""), body)

    def _error_for(self, status_code: int, content_type: str, body: bytes) -> DetaAPIError:
        """
        Convert an error response into the matching exception.

        Args:
            status_code: HTTP status of the response
            content_type: Content-Type header of the response
            body: Raw response body

        Returns:
            The exception to raise
        """
        error_message = None
        if "application/json" in content_type and body:
            try:
                errors = json.loads(body).get("errors") or []
                if errors:
                    error_message = errors[0]
            except (ValueError, AttributeError):
                logger.debug(f"Could not decode error body for status {status_code}")

        logger.error(f"Request failed with status {status_code}: {error_message or body[:200]!r}")

        if status_code == 400:
            return DetaAPIError(ErrorKind.BAD_REQUEST, status_code, error_message)
        elif status_code == 401:
            return DetaAuthError(ErrorKind.UNAUTHORIZED, status_code)
        elif status_code == 404:
            return DetaAPIError(ErrorKind.NOT_FOUND, status_code)
        elif status_code == 409:
            return DetaAPIError(ErrorKind.CONFLICT, status_code, error_message)
        else:
            return DetaServerError(ErrorKind.INTERNAL_SERVER_ERROR, status_code)

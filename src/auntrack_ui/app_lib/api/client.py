import logging
import requests
from typing import Dict, Any, Optional, List, Callable

from auntrack_ui.config.settings import config
from .errors import APIError, TransportError, error_for

logger = logging.getLogger("API_CLIENT")

Interceptor = Callable[[Dict[str, Any]], Dict[str, Any]]


class APIClient:
    """
    Thin ``requests`` wrapper around the calendar backend.

    Failures raise an ``APIError`` subclass. ``on_error`` (for example
    ``st.error``) is called with the message first, when given.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
        on_error: Optional[Callable[[str], Any]] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.base_url = (base_url or config.endpoints.base).rstrip('/')
        self.timeout = timeout or config.request_timeout
        self.on_error = on_error
        self._interceptors: List[Interceptor] = []
        self._setup_defaults()

    def _setup_defaults(self):
        """Setup default headers and session configuration"""
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    def add_interceptor(self, interceptor: Interceptor):
        self._interceptors.append(interceptor)

    def _apply_interceptors(self, request_config: Dict[str, Any]) -> Dict[str, Any]:
        for interceptor in self._interceptors:
            request_config = interceptor(request_config)
        return request_config

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith('http'):
            return endpoint
        if endpoint.startswith('/'):
            return f"{self.base_url}{endpoint}"
        return f"{self.base_url}/{endpoint}"

    def _to_error(self, error: requests.RequestException, url: str) -> APIError:
        response = getattr(error, "response", None)
        if isinstance(error, requests.exceptions.HTTPError) and response is not None:
            detail, error_code = None, None
            try:
                body = response.json()
                if isinstance(body, dict):
                    detail = body.get("detail")
                    error_code = body.get("error_code")
            except ValueError:
                pass
            message = str(detail) if detail else f"HTTP {response.status_code} error: {url}"
            return error_for(response.status_code, error_code, message)

        if isinstance(error, requests.exceptions.Timeout):
            return TransportError(f"Request timeout: {url}")
        if isinstance(error, requests.exceptions.ConnectionError):
            return TransportError(f"Connection error: Could not connect to {url}")
        return TransportError(f"Request failed: {str(error)}")

    def _handle_error(self, error: APIError) -> None:
        logger.warning(f"{type(error).__name__}: {error.message}")
        if self.on_error is not None:
            self.on_error(error.message)
        raise error

    def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> Any:
        request_config = self._apply_interceptors({
            "method": method,
            "url": self._build_url(endpoint),
            "headers": {},
            "params": params,
            "json": data,
        })
        url = request_config["url"]
        try:
            response = self.session.request(
                request_config["method"],
                url,
                headers=request_config["headers"],
                params=request_config["params"],
                json=request_config["json"],
                timeout=timeout or self.timeout,
            )
            response.raise_for_status()
            return response.json() if response.content else None
        except requests.RequestException as e:
            self._handle_error(self._to_error(e, url))
        except ValueError as e:
            self._handle_error(TransportError(f"Invalid JSON from {url}: {e}"))

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.request("GET", endpoint, params=params, **kwargs)

    def post(self, endpoint: str, data: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.request("POST", endpoint, data=data, **kwargs)

    def put(self, endpoint: str, data: Dict[str, Any], **kwargs) -> Any:
        return self.request("PUT", endpoint, data=data, **kwargs)

    def delete(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.request("DELETE", endpoint, params=params, **kwargs)

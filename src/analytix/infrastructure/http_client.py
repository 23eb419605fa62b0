"""Platform connection (requests session + transport retries).

All HTTP traffic to the platform goes through ``Connection`` so that status
mapping, retries and request statistics stay in one place.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections import defaultdict
from typing import Any, BinaryIO, Dict, Optional, Union
from urllib.parse import quote, urljoin, urlsplit

import requests

from analytix.domain.config.connection import ConnectionConfig
from analytix.domain.models.response import RestResponse
from analytix.errors import (
    AnalytixHTTPError,
    ArgumentError,
    AuthenticationError,
    HttpClientError,
    NotFoundError,
    TransientServerError,
    TransportError,
)
from analytix.infrastructure.retry import create_retry_decorator

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def _should_retry_transport_error(exception: BaseException) -> bool:
    """Retry only failures that never reached the server."""
    return isinstance(exception, (requests.exceptions.ConnectionError, requests.exceptions.Timeout))


def raise_for_status(response: RestResponse) -> RestResponse:
    """Map an error status onto the client exception hierarchy"""
    code = response.code
    if code < 400:
        return response
    message = f"HTTP {code} at {response.uri}: {response.text[:200]}"
    if code >= 500:
        error_class: type[AnalytixHTTPError] = TransientServerError
    elif code in (401, 403):
        error_class = AuthenticationError
    elif code == 404:
        error_class = NotFoundError
    else:
        error_class = HttpClientError
    raise error_class(message, status_code=code, uri=response.uri, response=response)


class Connection:
    """Authenticated HTTP session against the platform"""

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize connection

        Args:
            config: Connection configuration (defaults if None)
            session: Pre-built requests session (a new one if None)
        """
        self.config = config or ConnectionConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})
        self.session.verify = self.config.verify_ssl
        self.user: Optional[Dict[str, Any]] = None
        self._logout_uri: Optional[str] = None
        self._stats: Dict[tuple, Dict[str, float]] = defaultdict(lambda: {"count": 0, "time": 0.0})
        self._send = create_retry_decorator(self.config.retry, _should_retry_transport_error)(
            self._send_once
        )

    @property
    def server(self) -> str:
        return self.config.server

    @property
    def connected(self) -> bool:
        return self.user is not None

    def url(self, uri: str) -> str:
        """Resolve a platform URI against the configured server"""
        if "://" in uri:
            return uri
        return urljoin(self.server + "/", uri.lstrip("/"))

    # Session lifecycle

    def connect(self, username: Optional[str], password: Optional[str], **options: Any) -> "Connection":
        """Log in and load the account profile

        Raises:
            ArgumentError: If username or password is missing
            AuthenticationError: If the platform rejects the credentials
        """
        if not username or not password:
            raise ArgumentError("Username and password are required to connect")

        payload = {
            "postUserLogin": {
                "login": username,
                "password": password,
                "remember": 1 if options.get("remember") else 0,
            }
        }
        response = self.post(self.config.login_path, payload)
        login = (response.data or {}).get("userLogin", {})
        profile_uri = login.get("profile")
        self._logout_uri = login.get("state")
        self.user = self.get(profile_uri).data if profile_uri else {"accountSetting": {"login": username}}
        logger.info(f"Connected to {self.server} as {username}")
        return self

    def disconnect(self) -> None:
        """Log out (when logged in) and close the session"""
        if self._logout_uri:
            try:
                self.delete(self._logout_uri)
            except AnalytixHTTPError as e:
                logger.warning(f"Logout from {self.server} failed: {e}")
        self.user = None
        self._logout_uri = None
        self.session.close()
        logger.debug(f"Request statistics:\n{self.stats_table()}")
        logger.info(f"Disconnected from {self.server}")

    # HTTP verbs

    def get(self, uri: str, process: bool = True, **kwargs: Any) -> RestResponse:
        return self.request("GET", uri, process=process, **kwargs)

    def put(self, uri: str, data: Any, **kwargs: Any) -> RestResponse:
        return self.request("PUT", uri, data=data, **kwargs)

    def post(self, uri: str, data: Any, **kwargs: Any) -> RestResponse:
        return self.request("POST", uri, data=data, **kwargs)

    def delete(self, uri: str, **kwargs: Any) -> RestResponse:
        return self.request("DELETE", uri, **kwargs)

    def upload(
        self,
        file: Union[str, os.PathLike, BinaryIO],
        directory: Optional[str] = None,
        staging_url: Optional[str] = None,
        **kwargs: Any,
    ) -> RestResponse:
        """PUT a file into the staging area

        Args:
            file: Path or binary file object
            directory: Optional directory below the staging URL
            staging_url: Staging base URL (default: ``<server>/uploads/``)

        Returns:
            Upload response
        """
        base = str(staging_url or self.url("/uploads/"))
        if not base.endswith("/"):
            base += "/"
        if directory:
            base += quote(directory.strip("/")) + "/"

        if isinstance(file, (str, os.PathLike)):
            filename = os.path.basename(os.fspath(file))
            with open(file, "rb") as f:
                content = f.read()
        else:
            filename = os.path.basename(getattr(file, "name", "upload"))
            content = file.read()

        target = base + quote(filename)
        logger.info(f"Uploading {filename} to {target}")
        return self.request(
            "PUT",
            target,
            raw=content,
            headers={"Content-Type": "application/octet-stream"},
            **kwargs,
        )

    def request(
        self,
        method: str,
        uri: str,
        data: Any = None,
        process: bool = True,
        raw: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> RestResponse:
        """Send a request and return the mapped response

        Raises:
            TransientServerError: On 5xx
            HttpClientError: On 4xx (NotFoundError / AuthenticationError subclasses)
            TransportError: If the request failed at network level after retries
        """
        url = self.url(uri)
        request_headers = dict(JSON_HEADERS)
        request_headers.update(headers or {})
        body = raw
        if body is None and data is not None:
            body = json.dumps(data).encode("utf-8")

        started = time.monotonic()
        try:
            resp = self._send(method, url, body, request_headers)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        finally:
            self._record(method, url, time.monotonic() - started)

        response = RestResponse.build(
            code=resp.status_code,
            uri=uri,
            headers=dict(resp.headers),
            content=resp.content or b"",
            process=process and resp.status_code < 400,
        )
        return raise_for_status(response)

    def _send_once(
        self, method: str, url: str, body: Optional[bytes], headers: Dict[str, str]
    ) -> requests.Response:
        logger.debug(f"HTTP {method} {url}")
        return self.session.request(method, url, data=body, headers=headers, timeout=self.config.timeout)

    # Statistics

    def _record(self, method: str, url: str, elapsed: float) -> None:
        entry = self._stats[(method, urlsplit(url).path)]
        entry["count"] += 1
        entry["time"] += elapsed

    @property
    def stats(self) -> Dict[tuple, Dict[str, float]]:
        return dict(self._stats)

    def stats_table(self) -> str:
        """Render request statistics, slowest paths first"""
        rows = sorted(self._stats.items(), key=lambda item: item[1]["time"], reverse=True)
        lines = [f"{'METHOD':<8}{'COUNT':>7}{'TIME [s]':>11}  PATH"]
        for (method, path), entry in rows:
            lines.append(f"{method:<8}{int(entry['count']):>7}{entry['time']:>11.3f}  {path}")
        return "\n".join(lines)

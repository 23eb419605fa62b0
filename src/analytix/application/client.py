"""User's interface to the analytics platform"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import urljoin

from analytix.application.poller import Poller, Predicate
from analytix.domain.config.app import AppConfig
from analytix.domain.config.poll import PollOptions
from analytix.domain.models.profile import Profile
from analytix.domain.models.project import Project
from analytix.domain.models.response import RestResponse
from analytix.errors import ArgumentError
from analytix.infrastructure.config.config_manager import ConfigManager
from analytix.infrastructure.http_client import Connection
from analytix.infrastructure.object_factory import ObjectFactory
from analytix.infrastructure.retry import retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Client:
    """Client for platform REST operations

    Delegates HTTP verbs to its ``Connection``, resource lookups to an
    ``ObjectFactory`` and asynchronous waits to a ``Poller``.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        *,
        connection: Optional[Connection] = None,
        connection_factory: Callable[..., Connection] = Connection,
        sleep: Callable[[float], None] = time.sleep,
        connect: bool = True,
    ):
        """Initialize client

        Args:
            config: Application configuration (defaults if None)
            connection: Existing connection (built with connection_factory if None)
            connection_factory: Callable building a Connection from ConnectionConfig
            sleep: Sleeper used between polls
            connect: Log in right away
        """
        self.config = config or AppConfig()
        self.connection = connection or connection_factory(self.config.connection)
        self.factory = ObjectFactory(self)
        self.poller = Poller(
            self.get,
            sleep=sleep,
            defaults=PollOptions(
                completion_code=self.config.poll.completion_code,
                sleep_interval=self.config.poll.sleep_interval,
            ),
        )

        if connect:
            self.connect()

    @classmethod
    def from_config_file(cls, config_path: Optional[Path] = None, **kwargs: Any) -> "Client":
        """Build a client from .analytix.yml and ANALYTIX_* environment variables

        Raises:
            ConfigurationError: If configuration validation fails
        """
        return cls(ConfigManager(config_path).config, **kwargs)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.disconnect()

    def connect(self) -> None:
        conf = self.config.connection
        self.connection.connect(conf.username, conf.password)

    def disconnect(self) -> None:
        self.connection.disconnect()

    # Factory

    def create(self, klass: Type[T], data: Optional[dict] = None) -> T:
        return self.factory.create(klass, data)

    def find(self, klass: Type[T], id: Any) -> Optional[T]:
        return self.factory.find(klass, id)

    def project(self, id: Union[Project, str]) -> Optional[Project]:
        return self.find(Project, id)

    @property
    def user(self) -> Profile:
        """Profile of the logged-in account"""
        return self.create(Profile, self.connection.user)

    # Rest

    def get(self, uri: str, process: bool = True, **kwargs: Any) -> RestResponse:
        return self.connection.get(uri, process=process, **kwargs)

    def put(self, uri: str, data: Any, **kwargs: Any) -> RestResponse:
        return self.connection.put(uri, data, **kwargs)

    def post(self, uri: str, data: Any, **kwargs: Any) -> RestResponse:
        return self.connection.post(uri, data, **kwargs)

    def delete(self, uri: str, **kwargs: Any) -> RestResponse:
        return self.connection.delete(uri, **kwargs)

    def upload(self, file: Any, **kwargs: Any) -> RestResponse:
        return self.connection.upload(file, **kwargs)

    def poll_on_code(
        self, uri: str, options: Optional[PollOptions] = None, **overrides: Any
    ) -> RestResponse:
        """Wait for a task whose resource answers 202 while it runs

        See ``Poller.poll_on_code``.
        """
        return self.poller.poll_on_code(uri, options, **overrides)

    def poll_on_response(
        self,
        uri: str,
        predicate: Predicate,
        options: Optional[PollOptions] = None,
        **overrides: Any,
    ) -> RestResponse:
        """Wait for a task whose body tells whether it is done

        See ``Poller.poll_on_response``.
        """
        return self.poller.poll_on_response(uri, predicate, options, **overrides)

    def retryable(
        self,
        work: Callable[[], T],
        max_attempts: int = 1,
        on: Tuple[Type[BaseException], ...] = (Exception,),
    ) -> T:
        """Run work, retrying up to ``max_attempts`` times on ``on``"""
        return retryable(work, max_attempts=max_attempts, on=on)

    def upload_to_user_webdav(
        self,
        file: Any,
        project: Union[Project, str, None] = None,
        directory: Optional[str] = None,
    ) -> RestResponse:
        """Upload a file to the user staging area of a project's server

        Args:
            file: Path or binary file object
            project: Project instance, URI or id
            directory: Optional directory inside the staging area

        Raises:
            ArgumentError: If no project is given or it cannot be found
        """
        if project is None:
            raise ArgumentError("No project specified")

        resolved = self.project(project)
        if resolved is None:
            raise ArgumentError("Wrong project specified")

        uploads = resolved.links.get("uploads")
        if not uploads:
            raise ArgumentError(f"Project {resolved.uri} has no uploads link")

        url = urljoin(uploads, "/uploads/")
        return self.upload(file, directory=directory, staging_url=url)

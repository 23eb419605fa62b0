"""Generalized pollers for asynchronous platform tasks.

The platform reports long-running work in two ways: the status code of the
task resource stays at 202 while the task runs, or the task body carries a
status field. ``Poller`` turns either convention into a blocking wait. It never
gives up on its own; bound the wall time from outside if needed.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from analytix.domain.config.poll import PollOptions
from analytix.domain.models.response import RestResponse
from analytix.infrastructure.retry import RetryPolicy

logger = logging.getLogger(__name__)

Fetch = Callable[..., RestResponse]
Predicate = Callable[[RestResponse], bool]


class Poller:
    """Repeatedly fetch a resource until a completion condition holds"""

    def __init__(
        self,
        fetch: Fetch,
        sleep: Callable[[float], None] = time.sleep,
        defaults: Optional[PollOptions] = None,
    ):
        """Initialize poller

        Args:
            fetch: ``fetch(uri, process=...)`` returning a RestResponse
            sleep: Blocking sleeper, replaceable in tests
            defaults: Options used when a call does not pass its own
        """
        self.fetch = fetch
        self.sleep = sleep
        self.defaults = defaults or PollOptions()

    def _options(self, options: Optional[PollOptions], overrides: dict) -> PollOptions:
        base = options or self.defaults
        if not overrides:
            return base
        # Re-validate so unknown keys and bad values are rejected
        return PollOptions.model_validate({**dict(base), **overrides})

    def _guarded_fetch(self, uri: str, options: PollOptions, process: bool) -> RestResponse:
        """Sleep then fetch, retrying transient server errors"""

        def step() -> RestResponse:
            self.sleep(options.sleep_interval)
            return self.fetch(uri, process=process)

        return RetryPolicy(options.retry).call(step)

    def poll_on_code(
        self, uri: str, options: Optional[PollOptions] = None, **overrides: Any
    ) -> RestResponse:
        """Poll while the resource answers with ``completion_code``

        Status-only fetches are used while waiting. Once the code changes, the
        resource is fetched once more with body decoding, unless ``process``
        is off, in which case the last raw response is returned.

        Args:
            uri: Resource to poll
            options: Poll options (client defaults if None)
            **overrides: Individual PollOptions fields

        Returns:
            Final response
        """
        opts = self._options(options, overrides)
        response = self.fetch(uri, process=False)
        polls = 0
        while response.code == opts.completion_code:
            polls += 1
            logger.debug(f"{uri} still processing (HTTP {response.code}), poll #{polls}")
            self.sleep(opts.sleep_interval)
            response = self._guarded_fetch(uri, opts, process=False)

        logger.debug(f"{uri} finished with HTTP {response.code} after {polls} polls")
        if not opts.process:
            return response
        return self.fetch(uri, process=True)

    def poll_on_response(
        self,
        uri: str,
        predicate: Predicate,
        options: Optional[PollOptions] = None,
        **overrides: Any,
    ) -> RestResponse:
        """Poll while ``predicate(response)`` is true

        Args:
            uri: Resource to poll
            predicate: Returns True to keep polling, False when done
            options: Poll options (client defaults if None)
            **overrides: Individual PollOptions fields

        Returns:
            First response the predicate rejects
        """
        opts = self._options(options, overrides)
        response = self.fetch(uri, process=True)
        polls = 0
        while predicate(response):
            polls += 1
            logger.debug(f"{uri} not finished yet, poll #{polls}")
            self.sleep(opts.sleep_interval)
            response = self._guarded_fetch(uri, opts, process=True)

        logger.debug(f"{uri} finished after {polls} polls")
        return response

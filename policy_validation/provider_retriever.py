"""
Storage provider retrieval with retry.

At startup the backing database may not be reachable yet. ProviderRetriever
keeps asking the provider factory for a handle until it gets one, waiting a
fixed period between attempts. Only failures whose message (or the message
of any chained cause) contains the search string, "Connection refused" by
default, are retried; anything else is raised straight away.

The wait is interruptible: setting the cancel event stops the loop, and the
last creation failure is raised.
"""

import logging
import threading
from typing import Any, Callable, Optional, Union

from .parameters import DEFAULT_RETRY_PERIOD_SECONDS, DEFAULT_RETRY_SEARCH_STRING

logger = logging.getLogger(__name__)


def _create(factory: Union[Any, Callable[[Any], Any]], params: Any) -> Any:
    if hasattr(factory, "create_provider"):
        return factory.create_provider(params)
    return factory(params)


def _error_chain(error: BaseException):
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        yield error
        error = error.__cause__ or error.__context__


class ProviderRetriever:
    """Obtains a storage provider handle, retrying while the store is unreachable."""

    def __init__(
        self,
        retry_period_seconds: float = DEFAULT_RETRY_PERIOD_SECONDS,
        search_string: str = DEFAULT_RETRY_SEARCH_STRING,
    ):
        self.retry_period_seconds = retry_period_seconds
        self.search_string = search_string

    @classmethod
    def from_parameters(cls, params) -> "ProviderRetriever":
        """Build a retriever from ProviderParameters."""
        return cls(params.retry_period_seconds, params.retry_search_string)

    def is_recoverable(self, error: BaseException) -> bool:
        """Return True if the error, or any error it chains, mentions the search string."""
        return any(self.search_string in str(e) for e in _error_chain(error))

    def retrieve(
        self,
        factory,
        params,
        retry_period_seconds: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Create a provider, retrying without limit on recoverable failures.

        Args:
            factory: Object with create_provider(params), or a callable taking params
            params: Parameters passed to every creation attempt
            retry_period_seconds: Delay between attempts; defaults to the
                retriever's configured period
            cancel_event: Event that interrupts the wait when set; the event is
                left set so the caller can see the retrieval was cancelled

        Returns:
            The provider handle from the first successful attempt

        Raises:
            Exception: The creation failure itself if it is not recoverable, or
                the most recent creation failure if cancelled while waiting
        """
        if retry_period_seconds is None:
            retry_period_seconds = self.retry_period_seconds
        if cancel_event is None:
            cancel_event = threading.Event()

        while True:
            try:
                return _create(factory, params)
            except Exception as e:
                if not self.is_recoverable(e):
                    raise
                latest_error = e

            message = (
                f"Database connection failed with message: {latest_error}. "
                f"Connection will be retried after {retry_period_seconds} seconds"
            )
            logger.warning(message)
            logger.debug(message, exc_info=latest_error)

            if cancel_event.wait(retry_period_seconds):
                logger.warning("Retry delay interrupted, database connection failed")
                raise latest_error

"""Factory creating platform resources bound to a client"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Type, TypeVar

if TYPE_CHECKING:
    from analytix.application.client import Client

logger = logging.getLogger(__name__)

R = TypeVar("R")


class ObjectFactory:
    """Creates and looks up resource objects for one client

    A resource class provides ``from_json(data, client=...)`` and
    ``find(id, client=...)``.
    """

    def __init__(self, client: "Client"):
        self.client = client

    def create(self, klass: Type[R], data: Optional[Dict[str, Any]] = None) -> R:
        """Create a resource from its JSON representation"""
        return klass.from_json(data or {}, client=self.client)  # type: ignore[attr-defined]

    def find(self, klass: Type[R], id: Any) -> Optional[R]:
        """Find a resource by id or URI

        Returns:
            Resource, or None if it does not exist
        """
        logger.debug(f"Looking up {klass.__name__} {id}")
        return klass.find(id, client=self.client)  # type: ignore[attr-defined]

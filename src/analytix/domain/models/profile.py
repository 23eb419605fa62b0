"""Profile model - the logged-in account"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from analytix.errors import NotFoundError

if TYPE_CHECKING:
    from analytix.application.client import Client


@dataclass
class Profile:
    """Represents an account profile"""

    login: str = ""
    first_name: str = ""
    last_name: str = ""
    links: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def uri(self) -> Optional[str]:
        return self.links.get("self")

    @classmethod
    def from_json(cls, data: Dict[str, Any], client: Optional["Client"] = None) -> "Profile":
        body = data.get("accountSetting", data)
        return cls(
            login=body.get("login", ""),
            first_name=body.get("firstName", ""),
            last_name=body.get("lastName", ""),
            links=body.get("links", {}),
        )

    @classmethod
    def find(cls, uri: str, client: "Client") -> Optional["Profile"]:
        try:
            return cls.from_json(client.get(uri).data or {}, client=client)
        except NotFoundError:
            return None

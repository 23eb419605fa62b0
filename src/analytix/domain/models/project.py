"""Project model - a platform workspace"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from analytix.errors import NotFoundError

if TYPE_CHECKING:
    from analytix.application.client import Client

PROJECTS_PATH = "/gdc/projects"


@dataclass
class Project:
    """Represents a platform project"""

    uri: str
    title: str = ""
    links: Dict[str, str] = field(default_factory=dict)

    @property
    def pid(self) -> str:
        """Project id (last URI segment)"""
        return self.uri.rstrip("/").rsplit("/", 1)[-1]

    @classmethod
    def from_json(cls, data: Dict[str, Any], client: Optional["Client"] = None) -> "Project":
        """Create project from its ``{"project": {...}}`` representation"""
        body = data.get("project", data)
        meta = body.get("meta", {})
        links = body.get("links", {})
        return cls(uri=links.get("self", ""), title=meta.get("title", ""), links=links)

    @classmethod
    def find(
        cls, project: Union["Project", str, int], client: "Client"
    ) -> Optional["Project"]:
        """Resolve a project from an instance, URI or bare id

        Returns:
            Project, or None if the platform does not know it
        """
        if isinstance(project, Project):
            return project
        project = str(project)
        uri = project if project.startswith("/") or "://" in project else f"{PROJECTS_PATH}/{project}"
        try:
            response = client.get(uri)
        except NotFoundError:
            return None
        found = cls.from_json(response.data or {}, client=client)
        if not found.uri:
            found.uri = uri
        return found

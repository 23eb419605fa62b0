"""Platform resource and response models"""

from analytix.domain.models.profile import Profile
from analytix.domain.models.project import Project
from analytix.domain.models.response import RestResponse

__all__ = ["Profile", "Project", "RestResponse"]

"""
Domain models — Pydantic types for hookstrap.

All models are re-exported here for convenient access:

    from hookstrap.core.models import ProfileConfig, Receipt, Settings
"""

from hookstrap.core.models.action import Receipt
from hookstrap.core.models.profile import ArtifactSpec, ProfileConfig, ProfileName, ToolSpec
from hookstrap.core.models.settings import CommitlintSettings, Settings, VersionManagerSettings
from hookstrap.core.models.template import GeneratedFile

__all__ = [
    # profile.py
    "ArtifactSpec",
    # settings.py
    "CommitlintSettings",
    # template.py
    "GeneratedFile",
    "ProfileConfig",
    "ProfileName",
    # action.py
    "Receipt",
    "Settings",
    "ToolSpec",
    "VersionManagerSettings",
]

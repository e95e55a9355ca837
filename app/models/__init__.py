"""
Models package initializer.
"""

from app.models.platform_token import PlatformToken
from app.models.profile import Profile
from app.models.repository import Repository

__all__ = ["PlatformToken", "Profile", "Repository"]

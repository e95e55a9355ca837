"""
Utils package initializer.
"""

from app.utils.auth import get_authenticated_user, UserClaims

__all__ = ["get_authenticated_user", "UserClaims"]

"""
Theme mode model for the FitTrack application.

Classes:
    ThemeMode: Follow-system, light or dark colour scheme
"""

from enum import Enum
from typing import Optional


class ThemeMode(str, Enum):
    """
    Colour scheme selected by the user.

    The value of each member is the token written to the preference store.
    """

    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_token(cls, token: Optional[str]) -> "ThemeMode":
        """
        Parse a persisted token.

        Args:
            token: Stored token, or None when nothing was saved

        Returns:
            Matching mode; SYSTEM for a missing or unknown token
        """
        try:
            return cls(token)
        except ValueError:
            return cls.SYSTEM

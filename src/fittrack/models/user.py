"""
Authenticated user model for the FitTrack application.

Classes:
    AuthUser: Identity of a signed-up or signed-in user
"""

from typing import Optional

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """
    Identity returned by the auth service.

    Attributes:
        uid: Stable user identifier (the user pool ``sub``)
        email: Email address used as the username
        email_verified: Whether the email has been marked verified
        access_token: Token of the current session, if signed in
    """

    uid: str = Field(..., min_length=1, description="User identifier")
    email: str = Field(..., description="User email address")
    email_verified: bool = False
    access_token: Optional[str] = Field(None, repr=False)

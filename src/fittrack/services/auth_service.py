"""
Authentication service for the FitTrack application.

This service wraps an Amazon Cognito user pool and exposes the small
email/password surface the app and its tests rely on: sign up, sign in,
sign out and the current user. It also provisions the pool and its app client
on first use, which is what an emulator needs since it starts empty.

Classes:
    AuthService: Email/password authentication against a Cognito user pool
"""

import logging
from typing import Any, Dict, List, Optional

import boto3

from ..models.user import AuthUser

logger = logging.getLogger(__name__)

# Cognito's default policy is stricter than the app's sign-up form
PASSWORD_POLICY = {
    "MinimumLength": 6,
    "RequireUppercase": False,
    "RequireLowercase": False,
    "RequireNumbers": False,
    "RequireSymbols": False,
}


def _attribute(attributes: List[Dict[str, str]], name: str) -> Optional[str]:
    for attribute in attributes:
        if attribute["Name"] == name:
            return attribute["Value"]
    return None


class AuthService:
    """
    Service for email/password authentication.

    Attributes:
        client: Boto3 ``cognito-idp`` client
        user_pool_id: Id of the user pool holding the accounts
        client_id: Id of the app client used for sign-in

    Example:
        >>> auth = AuthService.provision(client, "demo-project-users")
        >>> user = auth.create_user_with_email_and_password(
        ...     "test@fittrack.test", "testpassword123"
        ... )
        >>> auth.current_user.uid == user.uid
        True
    """

    def __init__(self, client: Any, user_pool_id: str, client_id: str):
        self.client = client
        self.user_pool_id = user_pool_id
        self.client_id = client_id
        self._current_user: Optional[AuthUser] = None

    @classmethod
    def provision(
        cls, client: Optional[Any] = None, pool_name: str = "fittrack-users"
    ) -> "AuthService":
        """
        Find or create the user pool and app client, and return a service.

        Args:
            client: Optional ``cognito-idp`` client, e.g. one bound to an
                emulator endpoint
            pool_name: Name of the user pool (and of its app client)

        Returns:
            AuthService bound to the pool
        """
        client = client or boto3.client("cognito-idp")

        user_pool_id = None
        pages = client.get_paginator("list_user_pools").paginate(
            PaginationConfig={"PageSize": 60}
        )
        for pool in pages.search("UserPools[]"):
            if pool["Name"] == pool_name:
                user_pool_id = pool["Id"]
                break

        if user_pool_id is None:
            response = client.create_user_pool(
                PoolName=pool_name,
                Policies={"PasswordPolicy": PASSWORD_POLICY},
                AutoVerifiedAttributes=["email"],
            )
            user_pool_id = response["UserPool"]["Id"]
            logger.info("Created user pool %s (%s)", pool_name, user_pool_id)

        app_clients = client.get_paginator("list_user_pool_clients").paginate(
            UserPoolId=user_pool_id, PaginationConfig={"PageSize": 60}
        ).search("UserPoolClients[]")
        client_id = next(
            (c["ClientId"] for c in app_clients if c["ClientName"] == pool_name),
            None,
        )

        if client_id is None:
            response = client.create_user_pool_client(
                UserPoolId=user_pool_id,
                ClientName=pool_name,
                GenerateSecret=False,
                ExplicitAuthFlows=[
                    "ALLOW_USER_PASSWORD_AUTH",
                    "ALLOW_REFRESH_TOKEN_AUTH",
                ],
            )
            client_id = response["UserPoolClient"]["ClientId"]

        return cls(client, user_pool_id, client_id)

    @property
    def current_user(self) -> Optional[AuthUser]:
        """User of the current session, None when signed out."""
        return self._current_user

    def create_user_with_email_and_password(
        self, email: str, password: str
    ) -> AuthUser:
        """
        Create an account and sign it in.

        The account is confirmed and its email marked verified straight away;
        the app routes unverified users to a verification screen.

        Args:
            email: Email address, used as the username
            password: Account password

        Returns:
            The signed-in user

        Raises:
            botocore.exceptions.ClientError: If the account cannot be created,
                e.g. ``UsernameExistsException`` for a taken email
        """
        self.client.sign_up(
            ClientId=self.client_id,
            Username=email,
            Password=password,
            UserAttributes=[{"Name": "email", "Value": email}],
        )
        self.client.admin_confirm_sign_up(UserPoolId=self.user_pool_id, Username=email)
        self.client.admin_update_user_attributes(
            UserPoolId=self.user_pool_id,
            Username=email,
            UserAttributes=[{"Name": "email_verified", "Value": "true"}],
        )

        return self.sign_in_with_email_and_password(email, password)

    def sign_in_with_email_and_password(self, email: str, password: str) -> AuthUser:
        """
        Sign an existing account in and make it the current user.

        Raises:
            botocore.exceptions.ClientError: If the credentials are rejected
        """
        response = self.client.initiate_auth(
            ClientId=self.client_id,
            AuthFlow="USER_PASSWORD_AUTH",
            AuthParameters={"USERNAME": email, "PASSWORD": password},
        )
        access_token = response["AuthenticationResult"]["AccessToken"]

        user = self.client.admin_get_user(UserPoolId=self.user_pool_id, Username=email)
        attributes = user.get("UserAttributes", [])

        self._current_user = AuthUser(
            uid=_attribute(attributes, "sub") or user["Username"],
            email=_attribute(attributes, "email") or email,
            email_verified=_attribute(attributes, "email_verified") == "true",
            access_token=access_token,
        )
        return self._current_user

    def sign_out(self) -> None:
        """End the current session; does nothing when nobody is signed in."""
        if self._current_user is None:
            return

        user, self._current_user = self._current_user, None
        if user.access_token:
            self.client.global_sign_out(AccessToken=user.access_token)
        logger.debug("Signed out %s", user.uid)

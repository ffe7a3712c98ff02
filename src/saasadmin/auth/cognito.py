import logging
import time
from typing import Optional

import boto3
from botocore.exceptions import ClientError
from pydantic import BaseModel

from saasadmin.errors import UnauthorizedError

logger = logging.getLogger(__name__)

AUTH_FAILURES = ("NotAuthorizedException", "UserNotFoundException", "UserNotConfirmedException")


class AuthSession(BaseModel):
    id_token: str
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: float

    @property
    def expired(self) -> bool:
        return time.time() >= self.expires_at


class CognitoAuth:
    """
    Sign-up, sign-in, password reset and sign-out against a Cognito user pool client.

    The API itself never authenticates anybody: API Gateway checks the ID
    token issued here before a handler runs.
    """

    def __init__(self, user_pool_client_id: str, region_name: str = "us-east-1", client=None):
        self.client_id = user_pool_client_id
        self.client = client or boto3.client("cognito-idp", region_name=region_name)

    def sign_up(
        self, email: str, password: str, first_name: Optional[str] = None, last_name: Optional[str] = None
    ) -> str:
        attributes = [{"Name": "email", "Value": email}]
        if first_name:
            attributes.append({"Name": "given_name", "Value": first_name})
        if last_name:
            attributes.append({"Name": "family_name", "Value": last_name})
        response = self.client.sign_up(
            ClientId=self.client_id,
            Username=email,
            Password=password,
            UserAttributes=attributes,
        )
        return response["UserSub"]

    def confirm_sign_up(self, email: str, code: str):
        self.client.confirm_sign_up(ClientId=self.client_id, Username=email, ConfirmationCode=code)

    def resend_confirmation_code(self, email: str):
        self.client.resend_confirmation_code(ClientId=self.client_id, Username=email)

    def sign_in(self, email: str, password: str) -> AuthSession:
        response = self._initiate_auth(
            "USER_PASSWORD_AUTH", {"USERNAME": email, "PASSWORD": password}
        )
        return self._session(response)

    def refresh(self, session: AuthSession) -> AuthSession:
        if not session.refresh_token:
            raise UnauthorizedError("Session has no refresh token")
        response = self._initiate_auth("REFRESH_TOKEN_AUTH", {"REFRESH_TOKEN": session.refresh_token})
        refreshed = self._session(response)
        # Cognito does not rotate the refresh token on this flow.
        if not refreshed.refresh_token:
            refreshed = refreshed.model_copy(update={"refresh_token": session.refresh_token})
        return refreshed

    def forgot_password(self, email: str):
        self.client.forgot_password(ClientId=self.client_id, Username=email)

    def confirm_forgot_password(self, email: str, code: str, new_password: str):
        self.client.confirm_forgot_password(
            ClientId=self.client_id,
            Username=email,
            ConfirmationCode=code,
            Password=new_password,
        )

    def sign_out(self, session: AuthSession):
        try:
            self.client.global_sign_out(AccessToken=session.access_token)
        except ClientError as e:
            if e.response["Error"]["Code"] != "NotAuthorizedException":
                raise e
            logger.info("Session was already invalid at sign-out")

    def _initiate_auth(self, flow: str, parameters: dict) -> dict:
        try:
            return self.client.initiate_auth(ClientId=self.client_id, AuthFlow=flow, AuthParameters=parameters)
        except ClientError as e:
            code = e.response["Error"]["Code"]
            if code in AUTH_FAILURES:
                raise UnauthorizedError(e.response["Error"].get("Message", code), {"code": code})
            raise e

    def _session(self, response: dict) -> AuthSession:
        result = response.get("AuthenticationResult")
        if not result:
            raise UnauthorizedError(f"Sign-in needs a further challenge: {response.get('ChallengeName')}")
        return AuthSession(
            id_token=result["IdToken"],
            access_token=result["AccessToken"],
            refresh_token=result.get("RefreshToken"),
            expires_at=time.time() + result.get("ExpiresIn", 3600),
        )


class SessionTokenProvider:
    """
    Holds the signed-in session and hands its ID token to the API client.

    Pass an instance to ``ApiClient(token_provider=...)``; calling it returns
    the bearer token or ``None`` when nobody is signed in or the token expired.
    """

    def __init__(self, session: Optional[AuthSession] = None):
        self.session = session

    def set_session(self, session: Optional[AuthSession]):
        self.session = session

    def __call__(self) -> Optional[str]:
        if self.session is None or self.session.expired:
            return None
        return self.session.id_token

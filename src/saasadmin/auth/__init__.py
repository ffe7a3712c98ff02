from .cognito import AuthSession, CognitoAuth, SessionTokenProvider

__all__ = ["AuthSession", "CognitoAuth", "SessionTokenProvider"]

from typing import Any, Dict, Optional


class SaasAdminError(Exception):
    """Base exception for every error the admin API raises on purpose."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(SaasAdminError):
    """Raised when a request is missing fields or carries bad values."""

    status_code = 400


class UnauthorizedError(SaasAdminError):
    """Raised when the bearer token is missing, expired or rejected."""

    status_code = 401


class NotFoundError(SaasAdminError):
    status_code = 404


class AlreadyExistsError(SaasAdminError):
    status_code = 409

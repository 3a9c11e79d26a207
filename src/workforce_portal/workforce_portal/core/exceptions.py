class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or the session is gone."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class UploadError(DomainError):
    """Raised when the upload worker rejects or fails a file upload."""


class RateLimitedError(DomainError):
    """Raised when a remote service answers with HTTP 429."""


class BiometricNotEnrolledError(DomainError):
    """Raised when the device has biometric hardware but nothing enrolled."""


class BiometricVerificationError(DomainError):
    """Raised when biometric verification fails for a reason other than cancel."""

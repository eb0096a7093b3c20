# slatecms/core/errors.py
# Domain error taxonomy. Services raise these; the HTTP layer renders them
# through the handler registered in core/config.create_app.
from __future__ import annotations


class CMSError(Exception):
    code = "error"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# ---------- Session authentication ----------
class Unauthenticated(CMSError):
    code = "unauthenticated"
    status_code = 401
    default_message = "Authentication required"


class SessionExpired(CMSError):
    code = "session_expired"
    status_code = 401
    default_message = "Session expired, please log in again"


class InvalidCredentials(CMSError):
    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid email or password"


class AccountInactive(CMSError):
    code = "account_inactive"
    status_code = 403
    default_message = "User account is inactive"


class InsufficientRole(CMSError):
    code = "insufficient_role"
    status_code = 403
    default_message = "Insufficient role for this operation"


# ---------- API key authentication ----------
class InvalidKey(CMSError):
    code = "invalid_key"
    status_code = 401
    default_message = "Invalid API key"


class KeyRevoked(CMSError):
    code = "key_revoked"
    status_code = 401
    default_message = "API key has been revoked"


class KeyExpired(CMSError):
    code = "key_expired"
    status_code = 401
    default_message = "API key has expired"


class InvalidSecret(CMSError):
    code = "invalid_secret"
    status_code = 401
    default_message = "Invalid API secret"


class InsufficientPermission(CMSError):
    code = "insufficient_permission"
    status_code = 403
    default_message = "API key lacks the required permission"


class OriginNotAllowed(CMSError):
    code = "origin_not_allowed"
    status_code = 403
    default_message = "Origin not allowed for this API key"


# ---------- Lookup / validation / conflicts ----------
class NotFound(CMSError):
    code = "not_found"
    status_code = 404
    default_message = "Not found"


class ValidationError(CMSError):
    code = "validation_error"
    status_code = 400
    default_message = "Invalid request"


class EmailTaken(ValidationError):
    code = "email_taken"
    default_message = "An account with this email already exists"


class SlugTaken(ValidationError):
    code = "slug_taken"
    default_message = "Slug is already taken"


class InvalidSlugFormat(ValidationError):
    code = "invalid_slug_format"
    default_message = "Slug must be lowercase letters, numbers, and hyphens only"


class ContentTooLong(ValidationError):
    code = "content_too_long"
    default_message = "Text exceeds the maximum length"


class TypeChangeRequiresAdmin(ValidationError):
    code = "type_change_requires_admin"
    default_message = "Only admins can change the content type"


class InvalidTransition(ValidationError):
    code = "invalid_transition"
    default_message = "Invalid status transition"


class CannotDeactivateSelf(ValidationError):
    code = "cannot_deactivate_self"
    default_message = "Cannot deactivate yourself"


class Conflict(CMSError):
    code = "conflict"
    status_code = 409
    default_message = "Conflicting concurrent update, please retry"

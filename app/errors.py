# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

"""Typed failures raised by the stores and the token service.

Every error carries its HTTP status and a stable code so a single
exception handler in ``app.main`` can render them.
"""

from typing import Any, Dict, List, Optional


class ClarityError(Exception):
    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message, "code": self.error_code}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ClarityError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
        field: Optional[str] = None,
    ):
        if field and not details:
            details = [{"field": field, "issue": message or self.default_message}]
        super().__init__(message, details)


class ConflictError(ClarityError):
    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource already exists"


class InvalidCredentialsError(ClarityError):
    status_code = 401
    error_code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class NotFoundError(ClarityError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class InternalError(ClarityError):
    pass


class TokenError(ClarityError):
    status_code = 401
    error_code = "INVALID_TOKEN"
    default_message = "Invalid token"


class MissingTokenError(TokenError):
    error_code = "MISSING_TOKEN"
    default_message = "Access token required"


class ExpiredError(TokenError):
    error_code = "TOKEN_EXPIRED"
    default_message = "Token has expired"


class MalformedOrForgedError(TokenError):
    status_code = 403
    error_code = "INVALID_TOKEN"
    default_message = "Invalid or forged token"

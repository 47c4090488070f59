# exceptions.py
"""
Domain exceptions raised by the service layer.

Every error carries a human-readable ``message`` and an optional ``cause``
(diagnostic detail). ``main.py`` turns them into JSON responses of the shape
``{"error": code, "message": ..., "cause": ...}``.
"""
from typing import Any, Optional


class ServiceError(Exception):
     """Base exception for all business-rule and persistence failures."""

     code = "internal"
     status_code = 500

     def __init__(self, message: str, cause: Optional[Any] = None):
          super().__init__(message)
          self.message = message
          self.cause = cause

     def to_dict(self) -> dict:
          return {"error": self.code, "message": self.message, "cause": self.cause}


class ValidationError(ServiceError):
     """Missing or malformed input, reported before any write."""

     code = "validation"
     status_code = 422


class NotFoundError(ServiceError):
     """Referenced contract, room, tenant or invoice does not exist."""

     code = "not_found"
     status_code = 404


class ConflictError(ServiceError):
     """Uniqueness violation or a state that refuses the requested change."""

     code = "conflict"
     status_code = 409


class ForbiddenError(ServiceError):
     """Business rule forbids the operation (e.g. deleting a paid invoice)."""

     code = "forbidden"
     status_code = 403


class AuthenticationError(ServiceError):
     code = "unauthorized"
     status_code = 401


class InternalError(ServiceError):
     """Unexpected store failure."""

# security.py
"""
Bearer-token authentication shared by every router.

Tokens are HS256 JWTs carrying ``{"id": ..., "role": ...}`` where role is
"landlord" or "tenant".
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from jose import JWTError, jwt

from config import JWT_ALGORITHM, JWT_EXPIRE_MINUTES, JWT_SECRET
from exceptions import AuthenticationError, ForbiddenError

ROLE_LANDLORD = "landlord"
ROLE_TENANT = "tenant"


def create_access_token(subject_id: int, role: str, expires_minutes: Optional[int] = None) -> str:
     expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or JWT_EXPIRE_MINUTES)
     return jwt.encode({"id": subject_id, "role": role, "exp": expire}, JWT_SECRET, algorithm=JWT_ALGORITHM)


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise AuthenticationError("Missing token")
     token = auth.split(" ")[1]
     try:
          return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
     except JWTError:
          raise ForbiddenError("Invalid token")


def require_role(role: str):
     """Dependency factory: the caller's token must carry ``role``."""

     def checker(token: dict = Depends(verify_token)) -> dict:
          if token.get("role") != role:
               raise ForbiddenError(f"This action requires the {role} role")
          return token

     return checker


require_landlord = require_role(ROLE_LANDLORD)
require_tenant = require_role(ROLE_TENANT)

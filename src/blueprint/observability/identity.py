from typing import Dict, Optional

from fastapi import Request
from jose import jwt
from jose.exceptions import JWTError

from blueprint.observability.logger import log_event


IAP_USER_HEADER = "X-Goog-Authenticated-User-Email"


def _claims_identity(token: str) -> Optional[str]:
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError as e:
        log_event("IDENTITY_TOKEN_UNREADABLE", {"error": str(e)})
        return None
    return claims.get("email") or claims.get("sub")


def extract_user_identity(request: Request, payload: Optional[Dict] = None) -> str:
    """
    Identify who submitted a migration, for audit records only.

    Checked in order: proxy user header, bearer token claims
    (signature not verified), payload user_id, anonymous.
    """
    user_email = request.headers.get(IAP_USER_HEADER)
    if user_email:
        return user_email.split(":")[-1]

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        identity = _claims_identity(auth_header.split(" ", 1)[1])
        if identity:
            return identity

    if payload and payload.get("user_id"):
        return payload["user_id"]

    return "anonymous"

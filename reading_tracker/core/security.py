"""
Caller identity.

Authentication itself happens upstream (the hosted auth provider / gateway);
by the time a request reaches this API the verified user id is forwarded in
the `X-User-Id` header. Endpoints that write per-user state require it and
reject the call before touching the store.
"""
from typing import Optional

from fastapi import Header

from reading_tracker.core.errors import AuthenticationRequiredError

USER_HEADER = "X-User-Id"


def _clean(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def get_optional_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_HEADER),
) -> Optional[str]:
    return _clean(x_user_id)


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_HEADER),
) -> str:
    user_id = _clean(x_user_id)
    if user_id is None:
        raise AuthenticationRequiredError(action="reading progress")
    return user_id

# apps/api/betsim/routers/deps.py
from typing import Optional

from fastapi import Header, HTTPException


def current_user_id(x_user_id: Optional[str] = Header(None, description="Id of the acting user")) -> str:
    """The caller's user id, passed explicitly on every request."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id

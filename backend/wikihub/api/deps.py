# backend/wikihub/api/deps.py
from typing import Optional

from fastapi import Depends, Header, HTTPException


def get_member_id(x_member_id: Optional[int] = Header(None)) -> Optional[int]:
    """Caller identity, resolved upstream and forwarded in a header"""
    return x_member_id or None


def get_project_password(x_project_password: Optional[str] = Header(None)) -> Optional[str]:
    return x_project_password or None


def require_member_id(member_id: Optional[int] = Depends(get_member_id)) -> int:
    if member_id is None:
        raise HTTPException(status_code=401, detail="Member identity required")
    return member_id

# backend/wikihub/schemas/member.py
from typing import Optional
from .base import BaseSchema

class ProjectMember(BaseSchema):
    member_id: int
    role_type: int
    account: Optional[str] = None
    nickname: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None

# backend/wikihub/schemas/document.py
from pydantic import BaseModel

class TreeEntry(BaseModel):
    """Parent-pointer encoding consumed by jsTree"""
    id: str
    text: str
    parent: str

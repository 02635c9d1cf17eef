# backend/wikihub/services/__init__.py
from .cache import project_cache
from .projects import project_service
from .visibility import visibility_service

__all__ = ["project_cache", "project_service", "visibility_service"]

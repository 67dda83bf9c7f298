# househunter/models/__init__.py

from .user import (
    User,
    UserRole,
)

"""Blueprint exports."""

from . import auth, bulletin, funds

__all__ = [
    "auth",
    "bulletin",
    "funds",
]

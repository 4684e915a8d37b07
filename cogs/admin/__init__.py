"""
Admin Package

Administrative commands.
"""

from .commands import AdminCog

__all__ = ["AdminCog"]

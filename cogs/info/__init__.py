"""
Info Package

Read-only channel insight commands.
"""

from .commands import InfoCog

__all__ = ["InfoCog"]

"""
Broadcast Package

Announcement commands: one-off and repeating broadcasts.
"""

from .commands import BroadcastCog

__all__ = ["BroadcastCog"]

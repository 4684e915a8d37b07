"""
Training Package

Evaluator commands for delivering training results.
"""

from .commands import TrainingCog

__all__ = ["TrainingCog"]

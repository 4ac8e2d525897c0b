"""
Utility functions and helper classes
"""

from .logger import get_logger

__all__ = [
    'get_logger'
]

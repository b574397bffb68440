"""
Messaging components.
"""

from .publisher import Publisher, default_transformer

__all__ = ["Publisher", "default_transformer"]

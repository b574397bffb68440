"""
Value objects known to the document converter.
"""

from .period import DatePeriod, Period

__all__ = ["Period", "DatePeriod"]

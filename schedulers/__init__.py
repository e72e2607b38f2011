"""
CPU Scheduling Algorithms
"""

from .mlfq_scheduler import MLFQScheduler

__all__ = [
    'MLFQScheduler'
]

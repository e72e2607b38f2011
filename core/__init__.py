"""
Core modules for MLFQ Scheduler Simulator
"""

from .process import Process, ProcessState, create_process_copy
from .scheduler_base import SchedulerStats, GanttEntry, StepOutcome, StepResult
from .mlfq import MLFQ, InvalidConfiguration, InvalidQueueIndex

__all__ = [
    'Process',
    'ProcessState',
    'create_process_copy',
    'SchedulerStats',
    'GanttEntry',
    'StepOutcome',
    'StepResult',
    'MLFQ',
    'InvalidConfiguration',
    'InvalidQueueIndex'
]

"""
스케줄러 공통 자료구조: 실행 결과, Gantt Chart, 통계
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum
from .process import Process


class StepOutcome(Enum):
    """한 번의 실행 스텝 결과"""
    PREEMPTED = "Preempted"  # 퀀텀 소진, 다시 큐에 삽입됨
    COMPLETED = "Completed"  # 작업 완료, 스케줄링에서 제외됨


@dataclass
class StepResult:
    """execute_process 실행 결과"""
    outcome: StepOutcome
    process: Process
    from_level: int
    to_level: Optional[int]  # 완료된 경우 None
    start_time: int
    end_time: int

    @property
    def executed(self) -> int:
        return self.end_time - self.start_time


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리"""
    pid: int
    start_time: int
    end_time: int
    level: int  # 실행 당시 큐 레벨


class SchedulerStats:
    """스케줄링 통계"""

    def __init__(self):
        self.total_waiting_time = 0
        self.total_turnaround_time = 0
        self.total_response_time = 0
        self.context_switches = 0
        self.cpu_busy_time = 0
        self.total_simulation_time = 0
        self.process_count = 0
        self.demotions = 0
        self.boosts = 0

    def calculate_averages(self):
        """평균 계산"""
        if self.process_count == 0:
            return {
                'avg_waiting_time': 0,
                'avg_turnaround_time': 0,
                'avg_response_time': 0,
                'cpu_utilization': 0,
                'context_switches': self.context_switches,
                'demotions': self.demotions,
                'boosts': self.boosts
            }

        return {
            'avg_waiting_time': self.total_waiting_time / self.process_count,
            'avg_turnaround_time': self.total_turnaround_time / self.process_count,
            'avg_response_time': self.total_response_time / self.process_count,
            'cpu_utilization': (self.cpu_busy_time / self.total_simulation_time * 100)
                               if self.total_simulation_time > 0 else 0,
            'context_switches': self.context_switches,
            'demotions': self.demotions,
            'boosts': self.boosts
        }

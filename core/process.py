"""
프로세스 및 PCB (Process Control Block) 관리 모듈
"""

from enum import Enum
from typing import Optional
from copy import deepcopy


class ProcessState(Enum):
    """프로세스 상태"""
    READY = "Ready"
    RUNNING = "Running"
    TERMINATED = "Terminated"


class Process:
    """
    프로세스 제어 블록 (PCB)
    MLFQ 큐 레벨과 실행 시간 정보를 관리
    """

    def __init__(self, pid: int, priority: int, remaining_time: int,
                 total_executed_time: int = 0):
        """
        프로세스 초기화

        Args:
            pid: 프로세스 ID
            priority: 큐 레벨 (0이 최상위)
            remaining_time: 남은 CPU 시간
            total_executed_time: 지금까지 실행한 시간
        """
        if remaining_time < 0:
            raise ValueError(f"남은 시간은 0 이상이어야 합니다: {remaining_time}")
        if total_executed_time < 0:
            raise ValueError(f"실행 시간은 0 이상이어야 합니다: {total_executed_time}")

        self.pid = pid
        self.initial_priority = priority  # 초기 우선순위 저장
        self.priority = priority
        self.remaining_time = remaining_time
        self.total_executed_time = total_executed_time

        # remaining_time + total_executed_time 은 항상 이 값과 같아야 함
        self.total_work = remaining_time + total_executed_time

        self.state = ProcessState.READY

        # 통계 정보
        self.start_time: Optional[int] = None  # 첫 실행 시간
        self.finish_time: Optional[int] = None  # 완료 시간
        self.waiting_time = 0  # 대기 시간
        self.turnaround_time = 0  # 반환 시간
        self.response_time: Optional[int] = None  # 응답 시간

    def run_for(self, time_units: int) -> int:
        """
        프로세스 실행 (남은 시간 감소, 실행 시간 증가)

        Args:
            time_units: 실행할 최대 시간 단위

        Returns:
            실제로 실행한 시간
        """
        executed = min(time_units, self.remaining_time)
        self.remaining_time -= executed
        self.total_executed_time += executed
        return executed

    def is_completed(self) -> bool:
        """프로세스가 완료되었는지 확인"""
        return self.remaining_time == 0

    def __repr__(self):
        return f"P{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid}: State={self.state.value}, Priority={self.priority}, " \
               f"Remaining={self.remaining_time}, Executed={self.total_executed_time}"


def create_process_copy(process: Process) -> Process:
    """
    프로세스의 깊은 복사본 생성
    각 시뮬레이션을 독립적으로 수행하기 위함
    """
    return deepcopy(process)

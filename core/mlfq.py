"""
MLFQ (Multi-Level Feedback Queue) 스케줄링 엔진
- 레벨별 FIFO 큐와 타임 퀀텀
- 퀀텀 소진 시 한 단계 강등 (최하위 레벨은 그대로 유지)
- 주기적 우선순위 부스트로 기아 방지
"""

from collections import deque
from typing import Deque, Dict, List, Optional

from .config import BOOST_INTERVAL
from .process import Process, ProcessState
from .scheduler_base import StepOutcome, StepResult


class InvalidConfiguration(ValueError):
    """잘못된 엔진 설정 (레벨 수와 퀀텀 테이블 불일치 등)"""


class InvalidQueueIndex(IndexError):
    """존재하지 않는 큐 레벨 접근"""


class MLFQ:
    """
    MLFQ 스케줄러 상태 머신

    큐, 퀀텀 테이블, 시뮬레이션 시계를 모두 인스턴스가 소유하므로
    여러 시뮬레이션을 독립적으로 동시에 유지할 수 있다.
    """

    def __init__(self, num_levels: int, time_quanta: List[int],
                 boost_interval: int = BOOST_INTERVAL):
        """
        Args:
            num_levels: 큐 레벨 수
            time_quanta: 레벨별 타임 퀀텀 (길이 == num_levels)
            boost_interval: 우선순위 부스트 주기
        """
        if num_levels < 1:
            raise InvalidConfiguration(f"num_levels must be positive, got {num_levels}")
        if len(time_quanta) != num_levels:
            raise InvalidConfiguration(
                f"expected {num_levels} time quanta, got {len(time_quanta)}")
        if any(q <= 0 for q in time_quanta):
            raise InvalidConfiguration(f"time quanta must be positive: {list(time_quanta)}")
        if boost_interval < 1:
            raise InvalidConfiguration(f"boost_interval must be positive, got {boost_interval}")

        self.num_levels = num_levels
        self.time_quanta = list(time_quanta)
        self.boost_interval = boost_interval
        self.current_time = 0

        self._queues: List[Deque[Process]] = [deque() for _ in range(num_levels)]

        # 부스트/강등 추적
        self.boost_history: List[int] = []
        self.demotion_count = 0

        # 이벤트 로그
        self.event_log: List[str] = []

    @property
    def lowest_level(self) -> int:
        return self.num_levels - 1

    @property
    def boost_count(self) -> int:
        return len(self.boost_history)

    def log_event(self, message: str):
        """이벤트 로그 기록"""
        log_entry = f"[T={self.current_time:3d}] {message}"
        self.event_log.append(log_entry)

    def _check_index(self, queue_index: int):
        if not 0 <= queue_index < self.num_levels:
            raise InvalidQueueIndex(
                f"queue index {queue_index} out of range [0, {self.lowest_level}]")

    def add_process(self, process: Process):
        """
        프로세스를 우선순위에 해당하는 큐의 끝에 추가
        범위를 벗어난 우선순위는 최하위 레벨로 취급한다.
        """
        level = process.priority
        if not 0 <= level < self.num_levels:
            self.log_event(f"P{process.pid} priority {level} out of range → Queue {self.lowest_level}")
            level = self.lowest_level

        process.priority = level
        process.state = ProcessState.READY
        self._queues[level].append(process)
        self.log_event(f"P{process.pid} admitted → Queue {level}")

    def execute_process(self, queue_index: int) -> Optional[StepResult]:
        """
        지정한 큐의 맨 앞 프로세스를 최대 한 퀀텀만큼 실행

        Args:
            queue_index: 실행할 큐 레벨

        Returns:
            실행 결과 (큐가 비어 있으면 None)
        """
        self._check_index(queue_index)

        queue = self._queues[queue_index]
        if not queue:
            return None

        process = queue.popleft()
        quantum = self.time_quanta[queue_index]
        start_time = self.current_time

        process.state = ProcessState.RUNNING
        if process.start_time is None:
            process.start_time = start_time

        executed = process.run_for(quantum)
        self.current_time += executed

        if not process.is_completed():
            # 퀀텀 소진 - 하위 큐로 이동 (최하위면 같은 레벨 유지)
            new_level = min(queue_index + 1, self.lowest_level)
            if new_level != queue_index:
                self.demotion_count += 1
            process.priority = new_level
            process.state = ProcessState.READY
            self._queues[new_level].append(process)
            self.log_event(f"P{process.pid} ran {executed} (quantum={quantum}) "
                           f"→ Queue {new_level}")
            return StepResult(StepOutcome.PREEMPTED, process, queue_index, new_level,
                              start_time, self.current_time)

        process.state = ProcessState.TERMINATED
        process.finish_time = self.current_time
        self.log_event(f"P{process.pid} ran {executed} → Terminated")
        return StepResult(StepOutcome.COMPLETED, process, queue_index, None,
                          start_time, self.current_time)

    def priority_boost(self):
        """하위 레벨의 모든 프로세스를 레벨 순서대로 최상위 큐 끝으로 이동"""
        top = self._queues[0]
        moved = 0
        for queue in self._queues[1:]:
            while queue:
                process = queue.popleft()
                process.priority = 0
                top.append(process)
                moved += 1

        self.boost_history.append(self.current_time)
        self.log_event(f"Priority boost: {moved} process(es) → Queue 0")

    def update_time(self, elapsed_time: int):
        """
        시뮬레이션 시계 진행
        진행 후 시각이 부스트 주기의 배수(0 제외)에 정확히 도달하면 부스트 1회 수행
        """
        if elapsed_time < 0:
            raise ValueError(f"경과 시간은 0 이상이어야 합니다: {elapsed_time}")

        self.current_time += elapsed_time
        if self.current_time > 0 and self.current_time % self.boost_interval == 0:
            self.priority_boost()

    def get_queue(self, level: int) -> List[Process]:
        """큐 내용 복사본 반환 (디스패치 순서)"""
        self._check_index(level)
        return list(self._queues[level])

    @property
    def queues(self) -> List[List[Process]]:
        return [list(q) for q in self._queues]

    def queue_lengths(self) -> List[int]:
        return [len(q) for q in self._queues]

    def total_queued(self) -> int:
        return sum(len(q) for q in self._queues)

    def is_empty(self) -> bool:
        return self.total_queued() == 0

    def get_snapshot(self) -> Dict:
        """
        현재 엔진 상태 스냅샷 반환 (실시간 뷰어용)

        Returns:
            현재 상태 딕셔너리
        """
        return {
            'time': self.current_time,
            'queues': [
                [{'pid': p.pid, 'remaining': p.remaining_time,
                  'executed': p.total_executed_time} for p in q]
                for q in self._queues
            ],
            'boosts': self.boost_count,
            'demotions': self.demotion_count,
            'latest_log': self.event_log[-1] if self.event_log else ""
        }

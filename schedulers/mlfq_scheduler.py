"""
MLFQ 시뮬레이션 드라이버
엔진을 반복 호출하며 완료 프로세스 수거, Gantt Chart, 통계를 관리
"""

from typing import List, Optional, Dict

from core.config import DEFAULT_NUM_LEVELS, DEFAULT_TIME_QUANTA, BOOST_INTERVAL, SIMULATION_TIMEOUT
from core.mlfq import MLFQ
from core.process import Process, create_process_copy
from core.scheduler_base import GanttEntry, SchedulerStats, StepOutcome


class MLFQScheduler:
    """
    Multi-Level Feedback Queue 스케줄러
    - 항상 비어 있지 않은 가장 높은 우선순위 큐를 실행
    - 퀀텀 소진 시 강등, 주기적 부스트
    """

    def __init__(self, processes: List[Process], num_levels: int = DEFAULT_NUM_LEVELS,
                 time_quanta: Optional[List[int]] = None,
                 boost_interval: int = BOOST_INTERVAL):
        if time_quanta is None:
            time_quanta = DEFAULT_TIME_QUANTA
        self.name = f"MLFQ ({num_levels} levels, quanta={list(time_quanta)})"
        self.processes = [create_process_copy(p) for p in processes]
        self.engine = MLFQ(num_levels, time_quanta, boost_interval)

        self.previous_process: Optional[Process] = None  # 이전 실행 프로세스 추적
        self.terminated_processes: List[Process] = []

        # Gantt Chart 데이터
        self.gantt_chart: List[GanttEntry] = []

        # 통계
        self.stats = SchedulerStats()

        # 입장 시점의 남은 작업량 (이전 실행분은 대기 시간 계산에서 제외)
        self.admitted_work: Dict[int, int] = {}

        for process in self.processes:
            self.admitted_work[id(process)] = process.remaining_time
            self.engine.add_process(process)

    @property
    def current_time(self) -> int:
        return self.engine.current_time

    @property
    def event_log(self) -> List[str]:
        return self.engine.event_log

    def log_event(self, message: str):
        self.engine.log_event(message)

    def select_next_queue(self) -> Optional[int]:
        """비어 있지 않은 가장 높은 우선순위 큐 선택"""
        for level, length in enumerate(self.engine.queue_lengths()):
            if length:
                return level
        return None

    def terminate_process(self, process: Process):
        """완료된 프로세스 수거 및 통계 계산"""
        # 모든 프로세스는 시각 0에 도착
        process.turnaround_time = process.finish_time
        process.waiting_time = process.turnaround_time - self.admitted_work[id(process)]
        process.response_time = process.start_time

        self.terminated_processes.append(process)
        self.log_event(f"P{process.pid} harvested (WT={process.waiting_time}, "
                       f"TT={process.turnaround_time})")

    def is_simulation_complete(self) -> bool:
        """시뮬레이션 완료 여부 확인"""
        return len(self.terminated_processes) >= len(self.processes)

    def execute_one_step(self) -> bool:
        """
        큐 하나를 한 번 실행 (실시간 뷰어용)

        Returns:
            시뮬레이션 완료 여부
        """
        if self.is_simulation_complete():
            return True

        level = self.select_next_queue()
        if level is None:
            return True

        time_before = self.current_time
        result = self.engine.execute_process(level)
        process = result.process

        # 문맥 전환 카운팅: 다른 프로세스가 디스패치될 때만
        if self.previous_process is not None and self.previous_process.pid != process.pid:
            self.stats.context_switches += 1
        self.previous_process = process

        if result.executed > 0:
            self.gantt_chart.append(GanttEntry(process.pid, result.start_time,
                                               result.end_time, level))
            self.stats.cpu_busy_time += result.executed

        if result.outcome == StepOutcome.COMPLETED:
            self.terminate_process(process)

        # 이번 스텝이 부스트 주기의 배수를 지나거나 도달했으면 부스트
        interval = self.engine.boost_interval
        if time_before // interval < self.current_time // interval:
            self.engine.priority_boost()

        return self.is_simulation_complete()

    def update_statistics(self):
        """최종 통계 업데이트"""
        self.stats.total_simulation_time = self.current_time
        self.stats.process_count = len(self.terminated_processes)
        self.stats.demotions = self.engine.demotion_count
        self.stats.boosts = self.engine.boost_count

        self.stats.total_waiting_time = 0
        self.stats.total_turnaround_time = 0
        self.stats.total_response_time = 0
        for process in self.terminated_processes:
            self.stats.total_waiting_time += process.waiting_time
            self.stats.total_turnaround_time += process.turnaround_time
            if process.response_time is not None:
                self.stats.total_response_time += process.response_time

    def get_current_snapshot(self) -> Dict:
        """
        현재 시뮬레이션 상태 스냅샷 반환 (실시간 뷰어용)

        Returns:
            현재 상태 딕셔너리
        """
        snapshot = self.engine.get_snapshot()
        snapshot.update({
            'terminated': [p.pid for p in self.terminated_processes],
            'context_switches': self.stats.context_switches,
            'cpu_busy_time': self.stats.cpu_busy_time,
            'latest_gantt_entry': self.gantt_chart[-1] if self.gantt_chart else None,
        })
        return snapshot

    def run(self, verbose: bool = False) -> Dict:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 상세 로그 출력 여부

        Returns:
            시뮬레이션 결과 딕셔너리
        """
        self.log_event(f"===== {self.name} Scheduling Started =====")

        while not self.execute_one_step():
            # 무한 루프 방지
            if self.current_time > SIMULATION_TIMEOUT:
                self.log_event("WARNING: Simulation timeout")
                break

        self.log_event(f"===== {self.name} Scheduling Completed =====")

        if verbose:
            for log in self.event_log:
                print(log)

        return self.get_results()

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 딕셔너리 (통계, Gantt Chart, 로그 등)
        """
        self.update_statistics()

        return {
            'algorithm': self.name,
            'statistics': self.stats.calculate_averages(),
            'gantt_chart': self.gantt_chart,
            'event_log': self.event_log,
            'processes': self.terminated_processes,
            'boost_times': list(self.engine.boost_history)
        }

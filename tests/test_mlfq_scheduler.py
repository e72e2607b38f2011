"""Tests for the simulation driver that runs processes through the engine."""

import pytest

from core.mlfq import InvalidConfiguration
from core.process import Process, ProcessState
from core.scheduler_base import GanttEntry
from schedulers.mlfq_scheduler import MLFQScheduler


@pytest.fixture
def two_processes():
    return [Process(1, 0, 5), Process(2, 0, 3)]


def test_selects_highest_priority_nonempty_queue():
    scheduler = MLFQScheduler([Process(1, 2, 5), Process(2, 1, 5)])
    assert scheduler.select_next_queue() == 1


def test_select_returns_none_when_idle():
    scheduler = MLFQScheduler([])
    assert scheduler.select_next_queue() is None
    assert scheduler.execute_one_step()


def test_run_trace(two_processes):
    result = MLFQScheduler(two_processes, time_quanta=[2, 4, 8]).run()

    assert result['gantt_chart'] == [
        GanttEntry(1, 0, 2, 0),
        GanttEntry(2, 2, 4, 0),
        GanttEntry(1, 4, 7, 1),
        GanttEntry(2, 7, 8, 1),
    ]

    finished = {p.pid: p for p in result['processes']}
    assert finished[1].finish_time == 7
    assert finished[1].waiting_time == 2
    assert finished[1].response_time == 0
    assert finished[2].finish_time == 8
    assert finished[2].waiting_time == 5
    assert finished[2].response_time == 2

    stats = result['statistics']
    assert stats['avg_waiting_time'] == pytest.approx(3.5)
    assert stats['avg_turnaround_time'] == pytest.approx(7.5)
    assert stats['avg_response_time'] == pytest.approx(1.0)
    assert stats['cpu_utilization'] == pytest.approx(100.0)
    assert stats['context_switches'] == 3
    assert stats['demotions'] == 2
    assert stats['boosts'] == 0


def test_all_work_is_done():
    processes = [Process(pid, pid % 3, work) for pid, work in enumerate([13, 1, 27, 8, 40], 1)]
    scheduler = MLFQScheduler(processes)
    result = scheduler.run()

    assert len(result['processes']) == len(processes)
    assert all(p.state is ProcessState.TERMINATED for p in result['processes'])
    assert scheduler.stats.cpu_busy_time == sum(p.total_work for p in processes)
    assert scheduler.current_time == sum(p.total_work for p in processes)
    assert scheduler.engine.is_empty()


def test_boost_fires_when_clock_lands_on_interval():
    scheduler = MLFQScheduler([Process(1, 0, 250)], num_levels=2, time_quanta=[10, 10])
    result = scheduler.run()

    assert result['boost_times'] == [100, 200]
    assert result['statistics']['demotions'] == 3
    assert result['processes'][0].finish_time == 250


def test_boost_fires_when_step_crosses_interval():
    processes = [Process(1, 2, 150), Process(2, 2, 150), Process(3, 0, 10)]
    result = MLFQScheduler(processes).run()

    # 최하위 레벨은 26, 34, ... 로 진행하므로 100에 정확히 도달하지 않음
    assert result['boost_times'][0] == 106
    assert [t // 100 for t in result['boost_times']] == [1, 2, 3]
    assert len(result['processes']) == 3


def test_waiting_time_ignores_work_done_before_admission():
    result = MLFQScheduler([Process(1, 0, 5, 10)]).run()

    process = result['processes'][0]
    assert process.finish_time == 5
    assert process.waiting_time == 0
    assert result['statistics']['avg_waiting_time'] == 0


def test_input_processes_are_not_mutated(two_processes):
    MLFQScheduler(two_processes).run()
    assert [p.remaining_time for p in two_processes] == [5, 3]


def test_zero_work_process_is_harvested_without_gantt_entry():
    result = MLFQScheduler([Process(1, 0, 0)]).run()

    assert [p.pid for p in result['processes']] == [1]
    assert result['gantt_chart'] == []


def test_invalid_configuration_propagates():
    with pytest.raises(InvalidConfiguration):
        MLFQScheduler([Process(1, 0, 5)], num_levels=3, time_quanta=[2, 4])


def test_snapshot_after_step(two_processes):
    scheduler = MLFQScheduler(two_processes)
    scheduler.execute_one_step()

    snapshot = scheduler.get_current_snapshot()

    assert snapshot['time'] == 2
    assert [p['pid'] for p in snapshot['queues'][0]] == [2]
    assert [p['pid'] for p in snapshot['queues'][1]] == [1]
    assert snapshot['terminated'] == []
    assert snapshot['latest_gantt_entry'] == GanttEntry(1, 0, 2, 0)


def test_verbose_prints_event_log(two_processes, capsys):
    MLFQScheduler(two_processes).run(verbose=True)
    out = capsys.readouterr().out
    assert "Scheduling Started" in out
    assert "P2 harvested" in out

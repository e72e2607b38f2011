import pytest

from core.process import Process, ProcessState, create_process_copy


def test_new_process_is_ready():
    process = Process(1, 0, 10)
    assert process.state is ProcessState.READY
    assert process.total_work == 10
    assert process.initial_priority == 0
    assert not process.is_completed()


def test_total_work_includes_executed_time():
    process = Process(1, 1, 5, 3)
    assert process.total_work == 8


def test_run_for_caps_at_remaining_time():
    process = Process(1, 0, 3)

    assert process.run_for(8) == 3
    assert process.remaining_time == 0
    assert process.total_executed_time == 3
    assert process.is_completed()


@pytest.mark.parametrize("remaining, executed", [(-1, 0), (5, -2)])
def test_negative_times_rejected(remaining, executed):
    with pytest.raises(ValueError):
        Process(1, 0, remaining, executed)


def test_copy_is_independent():
    original = Process(1, 0, 10)
    copy = create_process_copy(original)
    copy.run_for(4)

    assert original.remaining_time == 10
    assert copy.remaining_time == 6

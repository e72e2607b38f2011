from core.process import Process
from schedulers.mlfq_scheduler import MLFQScheduler
from utils.visualization import Visualizer


def run_sample():
    processes = [Process(1, 0, 120), Process(2, 0, 4), Process(3, 1, 30)]
    return MLFQScheduler(processes, num_levels=2, time_quanta=[5, 10]).run()


def test_gantt_chart_is_saved(tmp_path):
    result = run_sample()
    save_path = tmp_path / "gantt.png"

    Visualizer().draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                  boost_times=result['boost_times'],
                                  save_path=str(save_path), show=False)

    assert save_path.exists()


def test_empty_gantt_chart_is_reported(capsys):
    Visualizer().draw_gantt_chart([], "MLFQ", show=False)
    assert "MLFQ" in capsys.readouterr().out


def test_statistics_and_details_are_printed(capsys):
    result = run_sample()
    visualizer = Visualizer()

    visualizer.print_statistics_table([result])
    visualizer.print_process_details(result)

    out = capsys.readouterr().out
    assert result['algorithm'] in out
    assert "120" in out

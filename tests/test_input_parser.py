from utils.input_parser import InputParser


def test_parse_file_skips_comments_and_bad_lines(tmp_path, capsys):
    path = tmp_path / "processes.txt"
    path.write_text(
        "# PID,Priority,TotalWork\n"
        "\n"
        "1,0,5\n"
        "2,1,12   # trailing comment\n"
        "3,x,4\n"
        "4,0,0\n"
        "5,0\n"
        "6,9,7\n",
        encoding="utf-8",
    )

    processes = InputParser.parse_file(str(path))

    assert [(p.pid, p.priority, p.total_work) for p in processes] == [
        (1, 0, 5), (2, 1, 12), (6, 9, 7)
    ]
    assert "경고" in capsys.readouterr().out


def test_missing_file_returns_empty_list(tmp_path):
    assert InputParser.parse_file(str(tmp_path / "missing.txt")) == []


def test_saved_file_can_be_loaded_again(tmp_path):
    processes = InputParser.generate_random_processes(num_processes=6, seed=7)
    path = tmp_path / "generated.txt"

    InputParser.save_processes_to_file(processes, str(path))
    loaded = InputParser.parse_file(str(path))

    assert [(p.pid, p.initial_priority, p.total_work) for p in loaded] == \
           [(p.pid, p.initial_priority, p.total_work) for p in processes]


def test_random_generation_is_seeded():
    first = InputParser.generate_random_processes(num_processes=5, max_priority=2, seed=42)
    second = InputParser.generate_random_processes(num_processes=5, max_priority=2, seed=42)

    assert [p.total_work for p in first] == [p.total_work for p in second]
    assert [p.pid for p in first] == [1, 2, 3, 4, 5]
    assert all(0 <= p.priority <= 2 for p in first)
    assert all(p.total_work > 0 for p in first)

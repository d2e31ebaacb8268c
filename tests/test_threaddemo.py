import io

from unixplay.threaddemo import increment_and_print, main, repeat_message, run_concurrently


def test_repeat_message_writes_each_time():
    buf = io.StringIO()
    repeat_message("ab", 3, 0, buf)
    assert buf.getvalue() == "ab" * 3


def test_repeat_message_zero_times_writes_nothing():
    buf = io.StringIO()
    repeat_message("ab", 0, 0, buf)
    assert buf.getvalue() == ""


def test_run_concurrently_writes_every_message():
    buf = io.StringIO()
    run_concurrently(["x", "y\n"], 4, 0, buf)
    text = buf.getvalue()
    assert text.count("x") == 4
    assert text.count("y\n") == 4
    assert len(text) == 4 * (len("x") + len("y\n"))


def test_increment_and_print_reports_counts():
    buf = io.StringIO()
    final = increment_and_print(5, 0, buf)
    assert final == 5
    lines = buf.getvalue().splitlines()
    assert len(lines) == 5
    for line in lines:
        prefix, _, value = line.partition("= ")
        assert prefix == "count "
        assert 0 <= int(value) <= final


def test_main_single_runs_in_order(capsys):
    assert main(["single", "--times", "2", "--delay", "0"]) == 0
    assert capsys.readouterr().out == "hellohelloworld\nworld\n"


def test_main_count(capsys):
    assert main(["count", "--times", "3", "--delay", "0"]) == 0
    assert capsys.readouterr().out.count("count = ") == 3
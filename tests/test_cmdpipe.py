import shlex

from unixplay.cmdpipe import main, numbered, read_command, write_command


def test_read_command_yields_lines():
    assert list(read_command("echo one; echo two")) == ["one\n", "two\n"]


def test_read_command_runs_pipelines():
    lines = list(read_command("printf 'b\\na\\n' | sort"))
    assert lines == sorted(lines)
    assert len(lines) == 2


def test_numbered_format():
    assert list(numbered(["a\n", "b\n"])) == ["  0 a\n", "  1 b\n"]


def test_numbered_keeps_line_text():
    source = [f"line {n}\n" for n in range(12)]
    result = list(numbered(source))
    assert [entry[4:] for entry in result] == source


def test_write_command_delivers_text(tmp_path):
    target = tmp_path / "out.txt"
    status = write_command(f"cat > {shlex.quote(str(target))}", "Error with backup!!\n")
    assert status == 0
    assert target.read_text() == "Error with backup!!\n"


def test_write_command_returns_exit_status():
    assert write_command("cat >/dev/null; exit 3", "ignored") == 3


def test_main_numbers_output(capsys):
    assert main(["echo hi"]) == 0
    assert capsys.readouterr().out == "  0 hi\n"


def test_main_plain_output(capsys):
    assert main(["--plain", "echo hi"]) == 0
    assert capsys.readouterr().out == "hi\n"


def test_main_send(tmp_path):
    target = tmp_path / "sent.txt"
    assert main(["--send", "hello\n", f"cat > {shlex.quote(str(target))}"]) == 0
    assert target.read_text() == "hello\n"
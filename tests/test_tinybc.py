import io
import shlex
import sys

import pytest

from unixplay.tinybc import DcCalculator, main, parse_expression, to_dc_program

# Stands in for dc: collects lines and, on "p", prints what it collected.
FAKE_DC = (
    "import sys\n"
    "tokens = []\n"
    "for line in sys.stdin:\n"
    "    word = line.strip()\n"
    "    if word == 'p':\n"
    "        print(' '.join(tokens), flush=True)\n"
    "        tokens = []\n"
    "    else:\n"
    "        tokens.append(word)\n"
)

FAKE_COMMAND = [sys.executable, "-c", FAKE_DC]


def test_parse_simple_expression():
    assert parse_expression("3+4\n") == (3, "+", 4)


def test_parse_allows_space_after_operator_and_signs():
    left, op, right = parse_expression("  -12* -5")
    assert (left, op, right) == (-12, "*", -5)


def test_parse_uses_first_of_several_operator_characters():
    assert parse_expression("7+-2")[1:] == ("+", 2)


@pytest.mark.parametrize("line", ["3 + 4", "abc", "3+", "", "+"])
def test_parse_rejects_bad_input(line):
    with pytest.raises(ValueError):
        parse_expression(line)


def test_dc_program_round_trips_through_parse():
    left, op, right = parse_expression("10/3")
    assert to_dc_program(left, op, right).split("\n") == ["10", "3", "/", "p", ""]


def test_calculator_sends_program_and_reads_answer():
    with DcCalculator(FAKE_COMMAND) as calc:
        first = calc.evaluate(6, "*", 7)
        second = calc.evaluate(1, "-", 2)
    assert first == "6 7 *\n"
    assert second.split() == ["1", "2", "-"]


def test_calculator_raises_eof_when_dc_is_gone():
    calc = DcCalculator([sys.executable, "-c", "pass"])
    calc._proc.wait()
    with pytest.raises(EOFError):
        calc.evaluate(1, "+", 1)
    calc.close()


def test_main_prints_answers_and_syntax_errors(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("2^8\n2 ^ 8\n"))
    command = " ".join(shlex.quote(part) for part in FAKE_COMMAND)
    assert main(["--command", command]) == 0
    out = capsys.readouterr().out
    assert "2 ^ 8 = 2 8 ^\n" in out
    assert "syntax error\n" in out
    assert out.count("tinybc: ") == 3


def test_main_reports_missing_calculator(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main(["--command", "/nonexistent/dc-program"]) == 5
    assert "Cannot run dc" in capsys.readouterr().err
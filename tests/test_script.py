# tests/test_script.py
"""
Tests for operation-script parsing and execution.
"""

import pytest

from intensity_segments import IntensityMap, InvalidAmountError, InvalidRangeError, ScriptError
from intensity_segments.errors import IntensityErrorCodes
from intensity_segments.script import (
    Command,
    ScriptRunner,
    format_number,
    parse_number,
    parse_script,
)


class TestNumbers:

    def test_integers_stay_exact(self):
        value = parse_number("9007199254740993")
        assert isinstance(value, int)
        assert value == 9007199254740993

    def test_decimals(self):
        assert parse_number("-2.5") == -2.5
        assert parse_number("1e3") == 1000.0

    @pytest.mark.parametrize("value, text", [(3, "3"), (3.0, "3"), (2.5, "2.5"), (-1, "-1")])
    def test_format(self, value, text):
        assert format_number(value) == text


class TestParseScript:

    def test_basic_statement(self):
        [cmd] = parse_script("add 10 30 1")
        assert cmd.op == "accumulate"
        assert cmd.args == (10, 30, 1)
        assert cmd.line == 1

    @pytest.mark.parametrize("name, op", [
        ("add", "accumulate"),
        ("accumulate", "accumulate"),
        ("set", "assign"),
        ("assign", "assign"),
        ("ADD", "accumulate"),
    ])
    def test_aliases(self, name, op):
        [cmd] = parse_script(f"{name} 1 2 3")
        assert cmd.op == op

    def test_query_takes_many_positions(self):
        [cmd] = parse_script("query 1 2.5 -3")
        assert cmd.op == "value_at"
        assert cmd.args == (1, 2.5, -3)

    def test_comments_blank_lines_and_spans(self):
        commands = parse_script("# setup\n\n  add 1 2 3  # note\nshow; reset", source="ops.txt")
        assert [c.op for c in commands] == ["accumulate", "show", "reset"]
        assert (commands[0].span.line, commands[0].span.column) == (3, 3)
        assert commands[0].span.source == "ops.txt"
        assert commands[1].line == 4

    def test_empty_script(self):
        assert parse_script("") == []
        assert parse_script("\n# only a comment\n") == []

    def test_command_str(self):
        [cmd] = parse_script("set 15 35 5.0")
        assert str(cmd) == "assign 15 35 5"

    def test_unknown_command(self):
        with pytest.raises(ScriptError) as info:
            parse_script("show\nfrobnicate 1")
        assert info.value.code == IntensityErrorCodes.UNKNOWN_COMMAND
        assert info.value.span.line == 2

    @pytest.mark.parametrize("text", ["add 1 2", "set 1 2 3 4", "query", "show 1", "reset 0"])
    def test_wrong_arity(self, text):
        with pytest.raises(ScriptError) as info:
            parse_script(text)
        assert info.value.code == IntensityErrorCodes.WRONG_ARITY

    def test_syntax_error_location(self):
        with pytest.raises(ScriptError) as info:
            parse_script("show\nadd 10 x 1")
        assert info.value.code == IntensityErrorCodes.SCRIPT_SYNTAX
        assert info.value.span.line == 2
        assert info.value.hint


class TestScriptRunner:

    def test_show_and_query_output(self):
        runner = ScriptRunner()
        output = runner.run_text("add 10 30 1\nshow\nquery 15 30")
        assert output == ["[[10,1],[30,0]]", "15: 1", "30: 0"]

    def test_sample_walkthrough(self):
        runner = ScriptRunner()
        output = runner.run_text("add 10 30 1; add 20 40 1; show; set 15 35 5; show")
        assert output == [
            "[[10,1],[20,2],[30,1],[40,0]]",
            "[[10,1],[15,5],[35,1],[40,0]]",
        ]

    def test_reset(self):
        runner = ScriptRunner()
        assert runner.run_text("add 1 2 3; reset; show") == ["[]"]

    def test_operates_on_given_map(self):
        imap = IntensityMap()
        ScriptRunner(imap).run_text("set 0 10 2")
        assert imap.serialize() == [[0, 2], [10, 0]]

    def test_decimal_query_output(self):
        runner = ScriptRunner()
        assert runner.run_text("add 10 30 1; query 15.5") == ["15.5: 1"]

    def test_validation_errors_propagate(self):
        runner = ScriptRunner()
        with pytest.raises(InvalidRangeError):
            runner.run_text("add 1 5 1\nadd 30 10 1")
        assert runner.map.serialize() == [[1, 1], [5, 0]]

    def test_run_accepts_commands(self):
        runner = ScriptRunner()
        out = runner.run([Command("accumulate", (0, 1, 4)), Command("show")])
        assert out == ["[[0,4],[1,0]]"]

    def test_iter_run_yields_before_failure(self):
        runner = ScriptRunner()
        seen = []
        with pytest.raises(InvalidRangeError):
            for line in runner.iter_run(parse_script("add 0 5 1; show; add 9 1 1; show")):
                seen.append(line)
        assert seen == ["[[0,1],[5,0]]"]

    def test_fractional_amount_rejected(self):
        runner = ScriptRunner()
        with pytest.raises(InvalidAmountError):
            runner.run_text("add 0 5 1.5")
        assert runner.map.serialize() == []

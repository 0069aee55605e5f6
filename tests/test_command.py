"""Tests for command module."""

from __future__ import annotations

import io

import pytest

from actions_toolkit.command import Command, escape_data, escape_property, issue_command


def _issue(*args, **kwargs) -> list[str]:
    out = io.StringIO()
    issue_command(*args, stream=out, **kwargs)
    return out.getvalue().splitlines()


class TestIssueCommand:
    """Test rendering of full command lines."""

    def test_command_only(self):
        assert _issue("some-command", {}, "") == ["::some-command::"]

    def test_name_only(self):
        assert _issue("endgroup") == ["::endgroup::"]

    def test_with_message(self):
        assert _issue("some-command", message="some message") == ["::some-command::some message"]

    def test_with_message_and_properties(self):
        props = {"prop1": "value 1", "prop2": "value 2"}
        assert _issue("some-command", props, "some message") == [
            "::some-command prop1=value 1,prop2=value 2::some message"
        ]

    def test_one_property(self):
        assert _issue("some-command", {"prop1": "value 1"}, "") == ["::some-command prop1=value 1::"]

    def test_properties_sorted_by_key(self):
        props = {"prop3": "value 3", "prop1": "value 1", "prop2": "value 2"}
        assert _issue("some-command", props, "") == [
            "::some-command prop1=value 1,prop2=value 2,prop3=value 3::"
        ]

    def test_blank_property_values_omitted(self):
        props = {"a": None, "b": "", "c": "   ", "d": "kept"}
        assert _issue("some-command", props, "") == ["::some-command d=kept::"]

    def test_all_properties_blank_drops_block(self):
        assert _issue("some-command", {"a": None}, "msg") == ["::some-command::msg"]

    def test_non_string_values(self):
        assert _issue("some-command", {"count": 3}, 42) == ["::some-command count=3::42"]

    def test_none_message_and_properties(self):
        assert _issue("some-command", None, None) == ["::some-command::"]

    def test_blank_command_uses_placeholder(self):
        assert _issue("  ", {}, "msg") == ["::missing.command::msg"]
        assert _issue(None, {}, "msg") == ["::missing.command::msg"]

    def test_escapes_message(self):
        lines = _issue("some-command", message="percent % percent % cr \r cr \r lf \n lf \n")
        assert lines == ["::some-command::percent %25 percent %25 cr %0D cr %0D lf %0A lf %0A"]

    def test_does_not_reescape_escape_sequences(self):
        lines = _issue("some-command", message="%25 %25 %0D %0D %0A %0A")
        assert lines == ["::some-command::%2525 %2525 %250D %250D %250A %250A"]

    def test_escapes_property(self):
        props = {"name": "percent % percent % cr \r cr \r lf \n lf \n colon : colon : comma , comma ,"}
        assert _issue("some-command", props, "") == [
            "::some-command name=percent %25 percent %25 cr %0D cr %0D lf %0A lf %0A "
            "colon %3A colon %3A comma %2C comma %2C::"
        ]

    def test_message_keeps_colons_and_commas(self):
        assert _issue("some-command", message="a:b,c") == ["::some-command::a:b,c"]

    def test_writes_to_stdout_by_default(self, capsys):
        issue_command("some-command", message="hello")
        assert capsys.readouterr().out == "::some-command::hello\n"


class TestEscaping:
    """Test the two escaping rules."""

    def test_percent_first(self):
        assert escape_data("\n") == "%0A"
        assert escape_data("%0A") == "%250A"

    def test_none(self):
        assert escape_data(None) == ""
        assert escape_property(None) == ""

    def test_property_rules_extend_message_rules(self):
        value = "100% done\r\nnext"
        assert escape_property(value) == escape_data(value)
        assert escape_property("a:b,c") == "a%3Ab%2Cc"
        assert escape_data("a:b,c") == "a:b,c"


class TestCommand:
    """Test the Command value."""

    def test_str(self):
        cmd = Command("warning", {"file": "app.py"}, "careful")
        assert str(cmd) == "::warning file=app.py::careful"

    def test_defaults(self):
        cmd = Command("", None, None)
        assert cmd.command == "missing.command"
        assert cmd.properties == {}
        assert str(cmd) == "::missing.command::"

    def test_properties_copied_at_construction(self):
        props = {"a": "1"}
        cmd = Command("x", props, "")
        props["b"] = "2"
        assert str(cmd) == "::x a=1::"

    def test_properties_read_only(self):
        cmd = Command("x", {"a": "1"}, "")
        with pytest.raises(TypeError):
            cmd.properties["b"] = "2"

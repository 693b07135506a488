"""Tests for AppleScript string escaping."""

from command_escaper import escape_applescript_string, quote_applescript_string
from native_writer import build_create_script

_UNESCAPE = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}


def split_script(script: str):
    """Return (code outside string literals, decoded literals)."""
    code, literals = [], []
    i = 0
    while i < len(script):
        ch = script[i]
        if ch != '"':
            code.append(ch)
            i += 1
            continue
        i += 1
        value = []
        while script[i] != '"':
            if script[i] == "\\":
                value.append(_UNESCAPE[script[i + 1]])
                i += 2
            else:
                value.append(script[i])
                i += 1
        i += 1
        code.append('""')
        literals.append("".join(value))
    return "".join(code), literals


def test_plain_text_is_unchanged():
    assert escape_applescript_string("Buy milk") == "Buy milk"
    assert quote_applescript_string("Buy milk") == '"Buy milk"'


def test_quotes_and_backslashes_are_escaped():
    assert escape_applescript_string('say "hi" \\ bye') == 'say \\"hi\\" \\\\ bye'


def test_line_breaks_become_escape_sequences():
    escaped = escape_applescript_string("a\nb\rc\td")
    assert escaped == "a\\nb\\rc\\td"
    assert "\n" not in escaped and "\r" not in escaped


def test_other_control_characters_become_spaces():
    assert escape_applescript_string("a\x00b\x07c\x1bd\x7fe") == "a b c d e"


def test_injected_statements_stay_inside_one_literal():
    title = 'x"\nend tell\ndo shell script "rm -rf ~" --\\'
    script = build_create_script(title)
    code, literals = split_script(script)
    baseline_code, _ = split_script(build_create_script("plain"))

    assert code == baseline_code
    assert literals == ["Reminders", title]
    assert len(script.splitlines()) == 3


def test_every_field_is_escaped():
    script = build_create_script('t"1', "01/05/2024 00:00:00", 'l"2', 'n"3\n')
    code, literals = split_script(script)
    assert literals == ["Reminders", 'l"2', 't"1', 'n"3\n', "01/05/2024 00:00:00"]
    assert "do shell script" not in code

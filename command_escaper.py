"""Escaping of user text embedded in generated AppleScript.

An escaped value can only ever be the body of one double-quoted string literal
on a single line: quotes and backslashes are escaped, line breaks and tabs
become escape sequences, and other control characters are dropped to a space.
"""

_SEQUENCES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_applescript_string(text: str) -> str:
    escaped = []
    for ch in text:
        if ch in _SEQUENCES:
            escaped.append(_SEQUENCES[ch])
        elif ord(ch) < 32 or ord(ch) == 127 or ch in "\u2028\u2029":
            escaped.append(" ")
        else:
            escaped.append(ch)
    return "".join(escaped)


def quote_applescript_string(text: str) -> str:
    """Return ``text`` as a complete AppleScript string literal."""
    return f'"{escape_applescript_string(text)}"'

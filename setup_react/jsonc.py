"""JSON-with-comments support for tsconfig and package.json rewriting.

``tsconfig.json`` files generated by Vite carry ``//`` and ``/* */`` comments,
which the standard ``json`` module rejects.  :func:`strip_comments` removes
them (leaving string literals untouched) so the result can be handed to
``json.loads``.  The read/write helpers below are the only places that touch
JSON documents on disk.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def strip_comments(text: str) -> str:
    """Remove ``//`` line comments and ``/* */`` block comments from *text*.

    Everything outside a comment, including the full contents of string
    literals, is copied through unchanged.  A line comment is dropped together
    with the newline that terminates it.  Block comments do not nest: the
    first ``*/`` closes them.

    Unterminated strings and comments simply run to the end of the input; the
    function never raises.  Malformed results are left for ``json.loads`` to
    reject.

    Examples::

        strip_comments('{"a":1 // note\\n,"b":2}')  -> '{"a":1 ,"b":2}'
        strip_comments('{"a": /* x */ 1}')          -> '{"a":  1}'
        strip_comments('{"url": "http://x"}')       -> '{"url": "http://x"}'
    """
    result: list[str] = []
    length = len(text)
    i = 0
    in_string = False

    while i < length:
        char = text[i]

        if in_string:
            if char == "\\":
                # Copy the escape and its target together so \" never closes the string.
                result.append(text[i : i + 2])
                i += 2
            elif char == '"':
                result.append(char)
                in_string = False
                i += 1
            else:
                result.append(char)
                i += 1
        elif char == '"':
            result.append(char)
            in_string = True
            i += 1
        elif text.startswith("//", i):
            newline = text.find("\n", i)
            i = length if newline == -1 else newline + 1
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
        else:
            result.append(char)
            i += 1

    return "".join(result)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def loads(text: str) -> Any:
    """Parse a JSON document that may contain comments.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON once comments
            have been removed.
    """
    return json.loads(strip_comments(text))


def load_jsonc(path: str | Path) -> Any:
    """Read and parse a JSON-with-comments file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON after stripping.
    """
    return loads(Path(path).read_text(encoding="utf-8"))


def dump_json(data: Any) -> str:
    """Serialise *data* with two-space indentation and a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(path: str | Path, data: Any) -> Path:
    """Write *data* to *path* as pretty-printed JSON.

    Comments present in the original file are not preserved.
    """
    file_path = Path(path)
    file_path.write_text(dump_json(data), encoding="utf-8")
    return file_path

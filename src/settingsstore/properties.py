"""Properties-format reader and writer.

Implements the ``key=value`` text format used by ``config.properties``:

- lines starting with ``#`` or ``!`` (after leading whitespace) are comments
- the key ends at the first unescaped ``=``, ``:`` or whitespace
- a line ending in an odd number of backslashes continues on the next line
- ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes are decoded;
  any other escaped character stands for itself

Byte input is decoded as ISO-8859-1 unless another encoding is given, so
non-Latin-1 text should be written with ``\\uXXXX`` escapes.

Usage:
    with open("app.properties", "rb") as f:
        entries = load_properties(f)

    entries = loads_properties("a=1\\nb = two")
"""

import re
from typing import IO, Iterator, Mapping, Union

from .errors import PropertiesSyntaxError

DEFAULT_ENCODING = "latin-1"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_NEWLINE = re.compile(r"\r\n|\r|\n")
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")

_DECODE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ENCODE_ESCAPES = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def _is_continued(line: str) -> bool:
    """True when the line ends with an odd number of backslashes."""
    stripped = line.rstrip("\\")
    return (len(line) - len(stripped)) % 2 == 1


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, logical_line)`` pairs, skipping comments and blanks."""
    natural = _NEWLINE.split(text)
    index = 0
    while index < len(natural):
        line_number = index + 1
        line = natural[index].lstrip(_WHITESPACE)
        index += 1
        if not line or line[0] in "#!":
            continue

        parts = []
        while _is_continued(line):
            parts.append(line[:-1])
            if index >= len(natural):
                line = ""
                break
            line = natural[index].lstrip(_WHITESPACE)
            index += 1
        parts.append(line)
        yield line_number, "".join(parts)


def _join_surrogates(value: str) -> str:
    # escaped surrogate pairs decode to two lone surrogates
    if not any("\ud800" <= ch <= "\udfff" for ch in value):
        return value
    return value.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )


def _unescape(raw: str, line_number: int) -> str:
    out = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        i += 1
        if ch != "\\":
            out.append(ch)
            continue
        if i >= len(raw):
            break
        ch = raw[i]
        i += 1
        if ch == "u":
            digits = raw[i:i + 4]
            if not _HEX4.fullmatch(digits):
                raise PropertiesSyntaxError(
                    "Malformed \\uxxxx encoding", line=line_number
                )
            out.append(chr(int(digits, 16)))
            i += 4
        else:
            out.append(_DECODE_ESCAPES.get(ch, ch))
    return _join_surrogates("".join(out))


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    limit = len(line)
    key_end = 0
    value_start = limit
    has_separator = False
    preceding_backslash = False

    while key_end < limit:
        ch = line[key_end]
        if not preceding_backslash:
            if ch in _SEPARATORS:
                value_start = key_end + 1
                has_separator = True
                break
            if ch in _WHITESPACE:
                value_start = key_end + 1
                break
        if ch == "\\":
            preceding_backslash = not preceding_backslash
        else:
            preceding_backslash = False
        key_end += 1

    while value_start < limit:
        ch = line[value_start]
        if ch not in _WHITESPACE:
            if not has_separator and ch in _SEPARATORS:
                has_separator = True
            else:
                break
        value_start += 1

    return line[:key_end], line[value_start:]


def loads_properties(text: str) -> dict[str, str]:
    """Parse properties text into a dict.

    Duplicate keys resolve to the last occurrence.

    Raises:
        PropertiesSyntaxError: On a malformed ``\\uXXXX`` escape.
    """
    entries: dict[str, str] = {}
    for line_number, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        entries[_unescape(raw_key, line_number)] = _unescape(raw_value, line_number)
    return entries


def load_properties(
    source: Union[bytes, str, IO],
    encoding: str = DEFAULT_ENCODING,
) -> dict[str, str]:
    """Parse properties from bytes, text, or a readable stream.

    The stream is read to the end but not closed.

    Args:
        source: Raw bytes, already-decoded text, or a binary/text stream.
        encoding: Used to decode byte input.

    Returns:
        The parsed key/value pairs.

    Raises:
        PropertiesSyntaxError: On malformed escapes.
        UnicodeDecodeError: If bytes do not decode with ``encoding``.
        OSError: If reading the stream fails.
    """
    if isinstance(source, (bytes, bytearray)):
        data: Union[bytes, str] = bytes(source)
    elif isinstance(source, str):
        data = source
    else:
        data = source.read()
    if isinstance(data, bytes):
        data = data.decode(encoding)
    return loads_properties(data)


def _escape(text: str, is_key: bool) -> str:
    out = []
    for index, ch in enumerate(text):
        if ch == " " and (is_key or index == 0):
            out.append("\\ ")
        elif ch in _ENCODE_ESCAPES:
            out.append(_ENCODE_ESCAPES[ch])
        elif " " <= ch <= "~":
            out.append(ch)
        else:
            encoded = ch.encode("utf-16-be", "surrogatepass")
            for offset in range(0, len(encoded), 2):
                unit = int.from_bytes(encoded[offset:offset + 2], "big")
                out.append(f"\\u{unit:04X}")
    return "".join(out)


def dumps_properties(mapping: Mapping[str, str], sort_keys: bool = True) -> str:
    """Render a mapping as ASCII properties text.

    Keys and values are escaped so ``loads_properties`` reads them back
    unchanged.
    """
    keys = sorted(mapping) if sort_keys else list(mapping)
    return "".join(
        f"{_escape(key, True)}={_escape(mapping[key], False)}\n" for key in keys
    )

"""Escape codec for the data region literal.

Every strategy produces a fragment that is embedded verbatim between the two
double quotes of a raw string literal (`r"..."`). The fragment must therefore
never contain an unescaped `"` nor end in a dangling backslash, and
`decode(encode(x, s), s) == x` holds for every strategy.

Output alphabets:

- standard: input characters, except `\\ " \\n \\r \\t` (two-character escapes)
  and any other control character (`\\xHH`).
- unicode: only `\\uXXXX` / `\\UXXXXXXXX` escapes, one per character.
- hex: only `\\xHH` escapes, one per UTF-8 byte.
- raw: the input itself; inputs holding a quote, a backslash or a control
  character (tab excepted) are rejected with `UnsafeRawInputError`.
"""

from __future__ import annotations

import unicodedata

from core.domain.errors import UnsafeRawInputError
from core.domain.strategy import EscapeStrategy


class EscapeDecodeError(ValueError):
    """A fragment that no strategy could have produced."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (position {position})")
        self.position = position


_STANDARD_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_STANDARD_UNESCAPES: dict[str, str] = {value[1]: key for key, value in _STANDARD_ESCAPES.items()}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _is_control(ch: str) -> bool:
    return unicodedata.category(ch) == "Cc"


def find_unsafe_raw(text: str) -> tuple[int, str] | None:
    """First character that cannot appear unescaped in the data literal."""

    for index, ch in enumerate(text):
        if ch in ('"', "\\"):
            return index, ch
        if ch != "\t" and _is_control(ch):
            return index, ch
    return None


def is_delimiter_safe(fragment: str) -> bool:
    """True if `fragment` cannot terminate the surrounding `r"..."` early.

    Backslashes pair with the following character (as the tokenizer does for
    raw strings), so every quote must be the second half of such a pair and
    the fragment must not end in an unpaired backslash.
    """

    index = 0
    length = len(fragment)
    while index < length:
        ch = fragment[index]
        if ch == "\\":
            if index + 1 >= length:
                return False
            index += 2
            continue
        if ch == '"' or ch in ("\n", "\r"):
            return False
        index += 1
    return True


def _encode_standard(text: str) -> str:
    out: list[str] = []
    for ch in text:
        escaped = _STANDARD_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif _is_control(ch):
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return "".join(out)


def _encode_unicode(text: str) -> str:
    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if code <= 0xFFFF:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    return "".join(out)


def _encode_hex(text: str) -> str:
    return "".join(f"\\x{byte:02x}" for byte in text.encode("utf-8", "surrogatepass"))


def _encode_raw(text: str) -> str:
    unsafe = find_unsafe_raw(text)
    if unsafe is not None:
        position, character = unsafe
        raise UnsafeRawInputError(character, position)
    return text


def encode(text: str, strategy: EscapeStrategy) -> str:
    """Render `text` as a literal fragment under `strategy`.

    Raises `UnsafeRawInputError` for raw input holding a delimiter.
    """

    strategy = EscapeStrategy.parse(strategy)
    if strategy is EscapeStrategy.STANDARD:
        fragment = _encode_standard(text)
    elif strategy is EscapeStrategy.UNICODE:
        fragment = _encode_unicode(text)
    elif strategy is EscapeStrategy.HEX:
        fragment = _encode_hex(text)
    else:
        fragment = _encode_raw(text)

    if not is_delimiter_safe(fragment):
        raise AssertionError(f"{strategy.value} encoder produced an unsafe fragment")
    return fragment


def _read_hex(fragment: str, start: int, width: int) -> int:
    digits = fragment[start : start + width]
    if len(digits) != width or not all(d in _HEX_DIGITS for d in digits):
        raise EscapeDecodeError(f"expected {width} hex digits", start)
    return int(digits, 16)


def _decode_standard(fragment: str) -> str:
    out: list[str] = []
    index = 0
    length = len(fragment)
    while index < length:
        ch = fragment[index]
        if ch == '"':
            raise EscapeDecodeError("unescaped quote", index)
        if ch != "\\":
            out.append(ch)
            index += 1
            continue
        if index + 1 >= length:
            raise EscapeDecodeError("dangling backslash", index)
        code = fragment[index + 1]
        if code in _STANDARD_UNESCAPES:
            out.append(_STANDARD_UNESCAPES[code])
            index += 2
        elif code == "x":
            out.append(chr(_read_hex(fragment, index + 2, 2)))
            index += 4
        else:
            raise EscapeDecodeError(f"unknown escape \\{code}", index)
    return "".join(out)


def _decode_unicode(fragment: str) -> str:
    out: list[str] = []
    index = 0
    length = len(fragment)
    while index < length:
        if fragment[index] != "\\" or index + 1 >= length:
            raise EscapeDecodeError("expected a \\u or \\U escape", index)
        code = fragment[index + 1]
        if code == "u":
            out.append(chr(_read_hex(fragment, index + 2, 4)))
            index += 6
        elif code == "U":
            value = _read_hex(fragment, index + 2, 8)
            if value > 0x10FFFF:
                raise EscapeDecodeError("code point out of range", index)
            out.append(chr(value))
            index += 10
        else:
            raise EscapeDecodeError(f"unknown escape \\{code}", index)
    return "".join(out)


def _decode_hex(fragment: str) -> str:
    data = bytearray()
    index = 0
    length = len(fragment)
    while index < length:
        if fragment.startswith("\\x", index):
            data.append(_read_hex(fragment, index + 2, 2))
            index += 4
        else:
            raise EscapeDecodeError("expected a \\x escape", index)
    try:
        return data.decode("utf-8", "surrogatepass")
    except UnicodeDecodeError as exc:
        raise EscapeDecodeError("bytes are not valid UTF-8", exc.start * 4) from exc


def _decode_raw(fragment: str) -> str:
    unsafe = find_unsafe_raw(fragment)
    if unsafe is not None:
        raise EscapeDecodeError(f"raw fragment holds {unsafe[1]!r}", unsafe[0])
    return fragment


def decode(fragment: str, strategy: EscapeStrategy) -> str:
    """Inverse of `encode`; raises `EscapeDecodeError` on malformed input."""

    strategy = EscapeStrategy.parse(strategy)
    if strategy is EscapeStrategy.STANDARD:
        return _decode_standard(fragment)
    if strategy is EscapeStrategy.UNICODE:
        return _decode_unicode(fragment)
    if strategy is EscapeStrategy.HEX:
        return _decode_hex(fragment)
    return _decode_raw(fragment)

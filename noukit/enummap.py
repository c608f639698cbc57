"""Name/value tables for enumerations declared as comma separated text."""

from __future__ import annotations

from collections.abc import Iterator

_BASE_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def split_string(text: str, sep: str = ",") -> list[str]:
    """Split ``text`` on ``sep``; a trailing empty field is not produced."""
    parts = text.split(sep)
    if parts[-1] == "":
        parts.pop()
    return parts


def _digits_of(text: str) -> tuple[str, int]:
    """Return the cleaned digit string and numeric base of a literal."""
    base = 10
    start = 0
    if len(text) > 1 and text[0] == "0":
        base = 8
        if text[1] == "b":
            base = 2
            start += 1
        elif text[1] == "x":
            base = 16
            start += 1
        start += 1

    digits: list[str] = []
    for char in text[start:]:
        if char.isdigit():
            if not (char == "0" and not digits):
                digits.append(char)
        elif base == 16:
            lowered = char.lower()
            if "a" <= lowered <= "e":
                digits.append(lowered)
    return ("".join(digits) or "0"), base


def parse_literal(text: str) -> int:
    """Parse an integer literal written in decimal, octal (0..), binary (0b..) or hex (0x..).

    As with a prefix-reading integer parse, digits are consumed until the first
    one that is invalid for the base; a literal with no valid leading digit
    raises ``ValueError``.
    """
    digits, base = _digits_of(text)
    valid = _BASE_DIGITS[:base]
    prefix = []
    for char in digits:
        if char not in valid:
            break
        prefix.append(char)
    if not prefix:
        raise ValueError(f"invalid integer literal: {text!r}")
    return int("".join(prefix), base)


def generate_enum_map(spec: str, unsigned: bool = False) -> dict[int, str]:
    """Build a value-to-name table from text like ``"A, B = 5, C"``.

    Values count up from zero; an explicit ``= value`` resets the counter.
    The returned dictionary is ordered by value.
    """
    cleaned = spec.replace(" ", "").replace("(", "")
    table: dict[int, str] = {}
    index = 0
    for token in split_string(cleaned):
        if "=" not in token:
            name = token
        else:
            pieces = split_string(token, "=")
            if len(pieces) < 2:
                raise ValueError(f"missing value in enum entry: {token!r}")
            name = pieces[0]
            index = parse_literal(pieces[1].replace("\n", ""))
            if unsigned and index < 0:
                raise ValueError(f"negative value for unsigned enum: {token!r}")
        table[index] = name
        index += 1
    return dict(sorted(table.items()))


class EnumMap:
    """A table of enumeration names keyed by their integer values."""

    def __init__(self, spec: str, unsigned: bool = False) -> None:
        self.unsigned = unsigned
        self._names = generate_enum_map(spec, unsigned)

    def name(self, value: int) -> str:
        """Name for ``value``, or an empty string when it has none."""
        return self._names.get(value, "")

    def parse(self, name: str, default: int | None = None) -> int | None:
        """Value of the first entry called ``name``, else ``default``."""
        for value, entry in self._names.items():
            if entry == name:
                return value
        return default

    def next_value(self, value: int) -> int:
        """The next declared value after ``value``, wrapping to the first."""
        values = list(self._names)
        if not values:
            raise ValueError("enumeration has no values")
        if value not in self._names:
            return values[0]
        position = values.index(value) + 1
        return values[position] if position < len(values) else values[0]

    def is_valid(self, value: int) -> bool:
        return value in self._names

    def items(self):
        return self._names.items()

    def __iter__(self) -> Iterator[int]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)
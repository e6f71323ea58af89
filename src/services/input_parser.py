"""Parse raw user input into whole numbers before conversion."""

from typing import Any, NamedTuple

from services.conversion_service import MESSAGES, FailureKind


class ParsedInput(NamedTuple):
    """Result of parsing raw input: a value or an error message."""

    value: int | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _invalid() -> ParsedInput:
    return ParsedInput(value=None, error=MESSAGES[FailureKind.INVALID_INPUT])


def parse_whole_number(raw: Any) -> ParsedInput:
    """
    Parse a non-negative whole number from form or JSON input.

    Accepts ints, integral floats (JSON ``4.0``) and decimal text with
    optional surrounding whitespace and a leading "+". Full-width digits
    are accepted.
    """
    if raw is None or isinstance(raw, bool):
        return _invalid()

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return _invalid()
        value = int(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if text.startswith("+"):
            text = text[1:]
        if not text or not text.isdecimal():
            return _invalid()
        try:
            value = int(text)
        except ValueError:
            # Digit strings past the interpreter conversion limit
            return _invalid()
    else:
        return _invalid()

    if value < 0:
        return _invalid()
    return ParsedInput(value=value)

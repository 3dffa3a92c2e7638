"""Cosmetic filter for login codes that look bad to a human."""

import re

CODE_LENGTH = 4


def _build_banned_patterns() -> list[re.Pattern[str]]:
    patterns = [re.compile("666")]
    # Ascending runs 0123 .. 6789
    patterns.extend(re.compile("".join(str(i + k) for k in range(CODE_LENGTH))) for i in range(7))
    # Descending runs 9876 .. 3210
    patterns.extend(re.compile("".join(str(i - k) for k in range(CODE_LENGTH))) for i in range(9, 2, -1))
    # Repeated digits 0000 .. 9999
    patterns.extend(re.compile(str(i) * CODE_LENGTH) for i in range(10))
    return patterns


BANNED_PATTERNS = _build_banned_patterns()


def is_banned_code(code: str) -> bool:
    """Check whether a candidate code matches any banned pattern."""
    return any(pattern.search(code) for pattern in BANNED_PATTERNS)


def is_code_format(value: str) -> bool:
    """Check whether value looks like a login code a client may submit."""
    return len(value) == CODE_LENGTH and value.isascii() and value.isdigit() and int(value) != 0

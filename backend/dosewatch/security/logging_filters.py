"""Log scrubbing for credentials and dose photos."""

from __future__ import annotations

import logging
import re

REDACTED = "**REDACTED**"

_PATTERNS = (
    re.compile(r"(Bearer\s+)[\w\.-]+", re.IGNORECASE),
    re.compile(
        r"(\"(?:access_token|token|password|photo_path|photoPath)\"\s*:\s*\")[^\"]*",
        re.IGNORECASE,
    ),
)


def scrub(text: str) -> str:
    for pattern in _PATTERNS:
        text = pattern.sub(rf"\g<1>{REDACTED}", text)
    return text


class SensitiveFilter(logging.Filter):
    """Redact tokens, passwords and photo paths from messages and their args."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                scrub(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["REDACTED", "SensitiveFilter", "scrub"]

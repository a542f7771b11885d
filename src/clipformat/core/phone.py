"""Phone records copied as "5551234567;home;ext 12"."""

from __future__ import annotations

import re
from typing import Optional

from clipformat.core.formatters import FormatterOptions

_NON_DIGIT = re.compile(r"\D")


def is_candidate(text: str, options: FormatterOptions) -> bool:
    return bool(text) and options.patterns.contains("phone_semicolon", text)


def format_phone(text: str) -> Optional[str]:
    """Return "(555) 123-4567,,,home" style dial strings."""

    fields = [field.strip() for field in text.split(";")]
    fields = [field for field in fields if field]
    if len(fields) < 2:
        return None
    digits = _NON_DIGIT.sub("", fields[0])
    if len(digits) != 10:
        return None
    formatted = f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return formatted + "".join(f",,,{field}" for field in fields[1:])


class PhoneFormatter:
    """Formatter wrapper registered under the name `phone`."""

    def is_candidate(self, text: str, options: FormatterOptions) -> bool:
        return is_candidate(text, options)

    def process(self, text: str, options: FormatterOptions) -> Optional[str]:
        if not is_candidate(text, options):
            return None
        return format_phone(text)

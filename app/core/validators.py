"""
Format checks for the three contact fields.

Used by the finders to accept or reject candidates, and by the upload flow
to decide which fields still have to be collected from the candidate.
"""

import re
from typing import List, Optional

from app.core.config import CONFIG


EMAIL_VALID_RE = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$", re.IGNORECASE)
NON_PHONE_CHARS_RE = re.compile(r"[^\d+]")
# Capitalized-word shape: only the first letter has to be uppercase, so "JOHN" qualifies
CAPITALIZED_WORD_RE = re.compile(r"^[A-Z][a-zA-Z'’-]*$")
NAME_FORBIDDEN_RE = re.compile(r"[@\d]")


def validate_email(s: Optional[str]) -> bool:
    return bool(EMAIL_VALID_RE.match((s or "").strip()))


def phone_digits(s: Optional[str]) -> str:
    """Digits only, with every '+' and separator removed."""
    return re.sub(r"\D", "", s or "")


def clean_phone(s: Optional[str]) -> str:
    """Keep digits and '+' signs (the finder's output format)."""
    return NON_PHONE_CHARS_RE.sub("", s or "")


def validate_phone(s: Optional[str]) -> bool:
    digits = phone_digits(clean_phone(s))
    return CONFIG.phone_min_digits <= len(digits) <= CONFIG.phone_max_digits


def count_capitalized_tokens(tokens: List[str]) -> int:
    return sum(1 for t in tokens if CAPITALIZED_WORD_RE.match(t))


def validate_name(s: Optional[str]) -> bool:
    text = (s or "").strip()
    if not text:
        return False
    tokens = text.split()
    if not (CONFIG.name_min_tokens <= len(tokens) <= CONFIG.name_max_tokens):
        return False
    if NAME_FORBIDDEN_RE.search(text):
        return False
    return count_capitalized_tokens(tokens) >= 2


def missing_fields(name: str, email: str, phone: str) -> List[str]:
    """Fields that fail validation, in the order the candidate is asked for them."""
    missing: List[str] = []
    if not validate_name(name):
        missing.append("name")
    if not validate_email(email):
        missing.append("email")
    if not validate_phone(phone):
        missing.append("phone")
    return missing

import logging
import re
from typing import Sequence

from app.core.validators import clean_phone, validate_phone

logger = logging.getLogger(__name__)


PHONE_HINT_RE = re.compile(r"(phone|mobile|mob\.?|tel\.?|contact|e:|p:)", re.IGNORECASE)
# Digit, then 8+ digits/spaces/parens/dots/hyphens, then a digit
PHONE_RUN_RE = re.compile(r"\+?\d[\d\s().-]{8,}\d")


def extract_phone_from_line(line: str) -> str:
    """
    Return the longest phone-shaped run in the line that validates, as digits
    with an optional leading '+'. Empty string when nothing validates.

    "Mobile: +1 (555) 123-4567" -> "+15551234567"
    """
    best = ""
    for m in PHONE_RUN_RE.finditer(line):
        cleaned = clean_phone(m.group(0))
        if validate_phone(cleaned) and len(cleaned) > len(best):
            best = cleaned
    return best


def find_phone(lines: Sequence[str]) -> str:
    """Prefer lines carrying a phone hint ("Phone", "Tel.", "P:"), then scan every line."""
    for line in lines:
        if PHONE_HINT_RE.search(line):
            phone = extract_phone_from_line(line)
            if phone:
                logger.debug(f"Phone picked from hinted line: '{phone}'")
                return phone
    for line in lines:
        phone = extract_phone_from_line(line)
        if phone:
            logger.debug(f"Phone picked from unhinted line: '{phone}'")
            return phone
    return ""

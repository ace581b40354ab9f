"""
Confidence scoring for contact-field extraction.

Each contact field gets a confidence and the method that produced it, so the
intake flow can decide which values to confirm with the candidate.

Scale:
  1.0   = Found in the header block and validated
  0.9   = Name found in the header block
  0.8   = Found in the document body, or an all-caps header name
  0.75  = Phone found outside the header block
  0.7   = Name found in the document body
  0.4   = Raw (unvalidated) email, or name guessed from the file name
  0.0   = Not found
"""

from typing import Dict, Sequence, Tuple

from app.core.validators import phone_digits, validate_email

CORE_FIELDS = ("full_name", "email", "phone")
# (tier, minimum mean confidence), checked in order
QUALITY_TIERS = (("high", 0.85), ("medium", 0.65))


def _appears_in(value: str, lines: Sequence[str]) -> bool:
    needle = value.lower()
    return any(needle in line.lower() for line in lines)


class ConfidenceCalculator:
    """Central place for all extraction confidence logic."""

    @staticmethod
    def email(email_value: str, header_lines: Sequence[str] = ()) -> Tuple[float, str]:
        """
        Calculate confidence for email extraction.

        High confidence if the address validates and sits in the header block.
        A raw candidate returned without validating is low confidence.
        """
        if not email_value:
            return 0.0, "no_email_found"

        if not validate_email(email_value):
            return 0.4, "invalid_email_format"

        if _appears_in(email_value, header_lines):
            return 1.0, "header_block"
        return 0.8, "document_body"

    @staticmethod
    def phone(phone_value: str, header_lines: Sequence[str] = ()) -> Tuple[float, str]:
        """
        Calculate confidence for phone extraction.

        Phones are validated by the finder, so only position matters here.
        Header lines are compared by digits since separators were stripped.
        """
        if not phone_value:
            return 0.0, "no_phone_found"

        digits = phone_digits(phone_value)
        if any(digits in phone_digits(line) for line in header_lines):
            return 1.0, "header_block"
        return 0.75, "document_body"

    @staticmethod
    def full_name(
        name_value: str,
        header_lines: Sequence[str] = (),
        lines: Sequence[str] = (),
    ) -> Tuple[float, str]:
        """
        Calculate confidence for full name extraction.

        Factors:
          + Found in the header block (strongest signal)
          - All caps (could be a company or a heading)
          - Only found further down the document
          - Not in the document at all (guessed from the file name)
        """
        if not name_value:
            return 0.0, "no_name_found"

        if _appears_in(name_value, header_lines):
            if name_value.isupper():
                return 0.8, "header_block_all_caps"
            return 0.9, "header_block"

        if _appears_in(name_value, lines):
            return 0.7, "document_body"

        return 0.4, "file_name"

    @staticmethod
    def calculate_overall_parse_quality(field_confidences: Dict[str, float]) -> str:
        """
        Overall tier from the mean confidence of name, email and phone.
        A field absent from the mapping counts as 0.0.
        """
        mean = sum(field_confidences.get(f, 0.0) for f in CORE_FIELDS) / len(CORE_FIELDS)
        for tier, floor in QUALITY_TIERS:
            if mean >= floor:
                return tier
        return "low"

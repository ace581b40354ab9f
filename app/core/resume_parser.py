"""
Contact-field extraction pipeline.

raw text -> normalize -> reconstruct_lines -> extract_header_block
         -> find_email / find_phone / find_name -> ParseResult

Every stage is a pure function over strings; nothing is shared between calls.
"""

import logging
from typing import Dict, List, Literal, Optional, Tuple

from app.core.confidence_calculator import ConfidenceCalculator
from app.core.config import CONFIG
from app.core.email_finder import find_email
from app.core.header_block import extract_header_block
from app.core.line_reconstruction import reconstruct_lines
from app.core.name_finder import find_name, guess_name_from_file_name
from app.core.phone_finder import find_phone
from app.core.schemas import FieldConfidence, ParseDebug, ParseResponse, ParseResult
from app.core.text_normalization import normalize
from app.core.validators import missing_fields

logger = logging.getLogger(__name__)


def _run_pipeline(raw_text: Optional[str], file_name_hint: str) -> Tuple[ParseResult, List[str], List[str]]:
    text = normalize(raw_text)
    lines = reconstruct_lines(text)
    header_lines = extract_header_block(lines)

    email = find_email(lines, header_lines)
    phone = find_phone(header_lines) or find_phone(lines)

    name = find_name(header_lines, email=email, phone=phone)
    if not name:
        logger.debug("No name in header block; retrying on the first document lines")
        name = find_name(lines[:CONFIG.name_fallback_lines], email=email, phone=phone)
    if not name:
        name = guess_name_from_file_name(file_name_hint)
        if name:
            logger.debug(f"Name guessed from file name '{file_name_hint}': '{name}'")

    result = ParseResult(
        name=name,
        email=email,
        phone=phone,
        debug=ParseDebug(
            header_preview=header_lines[:CONFIG.header_preview_size],
            first_lines_preview=lines[:CONFIG.first_lines_preview_size],
        ),
    )
    return result, lines, header_lines


def parse_resume_fields(raw_text: Optional[str], file_name_hint: str = "") -> ParseResult:
    """
    Recover name, email and phone from extracted resume text.

    Never raises: any field that cannot be found is returned as "".
    """
    try:
        result, _, _ = _run_pipeline(raw_text, file_name_hint)
    except Exception:
        logger.exception("Contact-field extraction failed; returning empty result")
        return ParseResult()
    return result


def build_parse_response(
    raw_text: Optional[str],
    file_name_hint: str = "",
    source: Literal["docx", "pdf", "user"] = "user",
) -> ParseResponse:
    """
    Parse and wrap the result with the fields still missing, per-field
    confidence, an overall quality tier and human-readable warnings.
    """
    try:
        result, lines, header_lines = _run_pipeline(raw_text, file_name_hint)
    except Exception:
        logger.exception("Contact-field extraction failed; returning empty result")
        result, lines, header_lines = ParseResult(), [], []

    confidence_scores: Dict[str, FieldConfidence] = {}

    conf, method = ConfidenceCalculator.email(result.email, header_lines)
    confidence_scores["email"] = FieldConfidence(
        field_name="email",
        confidence=conf,
        extraction_method=method,
        reasons=["Found via scored regex candidates"] if result.email else ["No email found in resume"],
    )

    conf, method = ConfidenceCalculator.phone(result.phone, header_lines)
    confidence_scores["phone"] = FieldConfidence(
        field_name="phone",
        confidence=conf,
        extraction_method=method,
        reasons=["Found via phone-shaped digit run"] if result.phone else ["No phone number found in resume"],
    )

    conf, method = ConfidenceCalculator.full_name(result.name, header_lines, lines)
    confidence_scores["full_name"] = FieldConfidence(
        field_name="full_name",
        confidence=conf,
        extraction_method=method,
        reasons=[f"Extracted from {method.replace('_', ' ')}"] if result.name else ["No candidate name found"],
    )

    parse_quality = ConfidenceCalculator.calculate_overall_parse_quality({
        field: fc.confidence for field, fc in confidence_scores.items()
    })

    warnings: List[str] = []
    labels = {"full_name": "name", "email": "email", "phone": "phone"}
    for field, fc in confidence_scores.items():
        label = labels[field]
        if fc.confidence == 0.0:
            warnings.append(f"Could not extract {label}. User clarification needed.")
        elif fc.confidence < 0.8:
            warnings.append(f"{label.capitalize()} extraction has low confidence: {fc.confidence:.2f}")

    return ParseResponse(
        result=result,
        missing=missing_fields(result.name, result.email, result.phone),
        confidence_scores=confidence_scores,
        parse_quality=parse_quality,
        warnings=warnings,
        source=source,
    )

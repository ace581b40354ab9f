"""
Test suite for per-field confidence scoring.

Demonstrates how confidence scores guide downstream decision-making about
whether extraction requires candidate clarification.
"""

from app.core.confidence_calculator import ConfidenceCalculator
from app.core.resume_parser import build_parse_response


def test_confidence_scores_present_in_response():
    """Every response carries confidence for the three contact fields."""
    resume_text = """JOHN DOE
Email: john.doe@example.com
555-123-4567
San Francisco, California
"""
    response = build_parse_response(resume_text)

    assert set(response.confidence_scores) == {"full_name", "email", "phone"}
    for field, fc in response.confidence_scores.items():
        assert fc.field_name == field
        assert 0.0 <= fc.confidence <= 1.0
        assert fc.reasons


def test_header_fields_give_high_quality():
    resume_text = """Jane Doe
Email: jane.doe@example.com
Phone: 555-123-4567

Experience
Acme Corp
"""
    response = build_parse_response(resume_text, source="pdf")

    assert response.confidence_scores["email"].confidence == 1.0
    assert response.confidence_scores["email"].extraction_method == "header_block"
    assert response.confidence_scores["phone"].confidence == 1.0
    assert response.confidence_scores["full_name"].confidence == 0.9
    assert response.parse_quality == "high"
    assert response.missing == []
    assert response.warnings == []
    assert response.source == "pdf"


def test_all_caps_name_scores_lower():
    response = build_parse_response("JOHN DOE\nEmail: john.doe@example.com\n555-123-4567")
    name_conf = response.confidence_scores["full_name"]
    assert name_conf.confidence == 0.8
    assert name_conf.extraction_method == "header_block_all_caps"


def test_missing_phone_warns_and_lowers_quality():
    response = build_parse_response("Jane Doe\nEmail: jane.doe@example.com")

    assert response.confidence_scores["phone"].confidence == 0.0
    assert response.missing == ["phone"]
    assert "Could not extract phone. User clarification needed." in response.warnings
    # (0.9 + 1.0 + 0.0) / 3 falls below the medium tier
    assert response.parse_quality == "low"


def test_file_name_guess_is_low_confidence():
    response = build_parse_response("jane.doe@example.com", file_name_hint="jane_doe_cv.pdf")

    assert response.result.name == "Jane Doe"
    name_conf = response.confidence_scores["full_name"]
    assert name_conf.confidence == 0.4
    assert name_conf.extraction_method == "file_name"
    assert "Name extraction has low confidence: 0.40" in response.warnings


def test_empty_text_is_low_quality():
    response = build_parse_response("")

    assert response.parse_quality == "low"
    assert response.missing == ["name", "email", "phone"]
    assert len(response.warnings) == 3


class TestConfidenceCalculator:

    def test_email(self):
        assert ConfidenceCalculator.email("") == (0.0, "no_email_found")
        assert ConfidenceCalculator.email("not-an-email") == (0.4, "invalid_email_format")
        assert ConfidenceCalculator.email("jane@x.com", ["Jane Doe", "JANE@x.com"]) == (1.0, "header_block")
        assert ConfidenceCalculator.email("jane@x.com", ["Jane Doe"]) == (0.8, "document_body")

    def test_phone_matches_header_by_digits(self):
        assert ConfidenceCalculator.phone("5551234567", ["Phone: (555) 123-4567"]) == (1.0, "header_block")
        assert ConfidenceCalculator.phone("5551234567", ["Jane Doe"]) == (0.75, "document_body")
        assert ConfidenceCalculator.phone("") == (0.0, "no_phone_found")

    def test_full_name(self):
        assert ConfidenceCalculator.full_name("Jane Doe", ["Jane Doe"]) == (0.9, "header_block")
        assert ConfidenceCalculator.full_name("Jane Doe", [], ["Skills", "Jane Doe"]) == (0.7, "document_body")
        assert ConfidenceCalculator.full_name("Jane Doe", [], []) == (0.4, "file_name")
        assert ConfidenceCalculator.full_name("") == (0.0, "no_name_found")

    def test_overall_quality_tiers(self):
        calc = ConfidenceCalculator.calculate_overall_parse_quality
        assert calc({"full_name": 1.0, "email": 1.0, "phone": 0.75}) == "high"
        assert calc({"full_name": 0.7, "email": 0.8, "phone": 0.75}) == "medium"
        assert calc({"full_name": 0.4, "email": 0.8, "phone": 0.0}) == "low"
        assert calc({}) == "low"

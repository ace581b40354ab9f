"""
Tests for name scoring, selection and the file-name fallback.
"""

import pytest

from app.core.name_finder import find_name, guess_name_from_file_name, score_as_name


class TestScoreAsName:

    def test_title_case_at_top(self):
        assert score_as_name("John Smith", 0) == 10

    def test_all_caps_penalized(self):
        assert score_as_name("JOHN SMITH", 0) == 8

    def test_job_title_penalized(self):
        assert score_as_name("Senior Software Engineer", 0) < score_as_name("Jane Marie Doe", 0)

    def test_digits_penalized(self):
        assert score_as_name("Jane Doe 2024", 0) < score_as_name("Jane Doe", 0)

    def test_position_bonus_decays(self):
        assert score_as_name("Jane Doe", 0) > score_as_name("Jane Doe", 3)
        assert score_as_name("Jane Doe", 5) == score_as_name("Jane Doe", 9)


class TestFindName:

    def test_all_caps_name_accepted(self):
        assert find_name(["JOHN SMITH", "john@x.com"], email="john@x.com") == "JOHN SMITH"

    def test_lowercase_name_rejected(self):
        assert find_name(["john smith", "john@x.com"], email="john@x.com") == ""

    def test_name_split_from_title_by_pipe(self):
        assert find_name(["Jane Doe | Software Engineer", "jane@x.com"]) == "Jane Doe"

    def test_contact_fragments_removed(self):
        line = "Jane Doe  jane@x.com  5551234567"
        assert find_name([line], email="jane@x.com", phone="5551234567") == "Jane Doe"

    def test_label_and_heading_lines_skipped(self):
        lines = ["Resume", "Curriculum Vitae of Jane Doe", "Contact Details:", "Jane Doe"]
        assert find_name(lines) == "Jane Doe"

    def test_truncated_at_hyphen_when_invalid(self):
        assert find_name(["Jane Doe-2024"]) == "Jane Doe"

    def test_surname_containing_cv_letters_kept(self):
        assert find_name(["Mary McVey"]) == "Mary McVey"

    def test_empty(self):
        assert find_name([]) == ""


class TestGuessNameFromFileName:

    @pytest.mark.parametrize("file_name, expected", [
        ("john_doe_resume.pdf", "John Doe"),
        ("C:\\Users\\me\\Jane-Smith-CV.docx", "Jane Smith"),
        ("Resume - jane-smith.docx", "Jane Smith"),
        ("/uploads/MARY.ANN.LEE.pdf", "Mary Ann Lee"),
    ])
    def test_guesses(self, file_name, expected):
        assert guess_name_from_file_name(file_name) == expected

    @pytest.mark.parametrize("file_name", ["resume.pdf", "scan_2024.pdf", "", None])
    def test_no_guess(self, file_name):
        assert guess_name_from_file_name(file_name) == ""

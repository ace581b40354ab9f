"""
Name finder: score header lines as person names and pick the best.

Names have no reliable pattern of their own, so candidates are ranked by shape
(2-5 capitalized tokens, no digits or '@') and by how close they sit to the top
of the document. Lines that look like labels, section headings or contact
details are rejected before scoring.
"""

import logging
import re
from typing import List, Sequence

from app.core.candidates import FieldCandidate, rank_candidates
from app.core.config import CONFIG
from app.core.header_block import SECTION_HEADINGS
from app.core.validators import NAME_FORBIDDEN_RE, count_capitalized_tokens, validate_name

logger = logging.getLogger(__name__)


# Words that mark a line as something other than the candidate's name
BAD_NAME_WORDS = (
    "resume",
    "curriculum vitae",
    "cv",
    "contact",
    "email",
    "phone",
    "address",
    "github",
    "linkedin",
    "portfolio",
    "website",
) + SECTION_HEADINGS

BAD_NAME_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(w) for w in BAD_NAME_WORDS) + r")\b",
    re.IGNORECASE,
)
TRAILING_PUNCT_RE = re.compile(r"[,:;]$")
CONTACT_LABEL_RE = re.compile(r"(?:\b(?:e-?mail|phone|mobile|tel|contact)\b|\b[ep]:).*$", re.IGNORECASE)
SEPARATOR_GLYPHS_RE = re.compile(r"[|•,;]+")
SUB_CANDIDATE_SPLIT_RE = re.compile(r"\s{2,}| \| | - ")
ALL_CAPS_RE = re.compile(r"^[A-Z\s]+$")
JOB_TITLE_END_RE = re.compile(r"\b(?:Engineer|Developer|Manager|Student|Intern)\b$", re.IGNORECASE)
TRUNCATE_RE = re.compile(r"[,-]")

FILE_EXT_RE = re.compile(r"\.(?:pdf|docx|doc)$", re.IGNORECASE)
FILE_KEYWORD_RE = re.compile(r"resume|curriculum|vitae|profile", re.IGNORECASE)
FILE_SEPARATOR_RE = re.compile(r"[_\-.\s]+")


def score_as_name(s: str, line_index: int) -> int:
    tokens = s.split()
    score = 0
    if CONFIG.name_min_tokens <= len(tokens) <= CONFIG.name_max_tokens:
        score += 3
    score += count_capitalized_tokens(tokens)
    if NAME_FORBIDDEN_RE.search(s):
        score -= 5
    if ALL_CAPS_RE.match(s) and len(s) > 6:
        score -= 2
    if JOB_TITLE_END_RE.search(s):
        score -= 2
    score += max(0, CONFIG.name_top_bonus - line_index)
    return score


def _strip_contact_fragments(line: str, email: str, phone: str) -> str:
    cand = CONTACT_LABEL_RE.sub("", line)
    if email:
        cand = cand.replace(email, "", 1)
    if phone:
        cand = cand.replace(phone, "", 1)
    return SEPARATOR_GLYPHS_RE.sub(" ", cand).strip()


def _collect_name_candidates(lines: Sequence[str], email: str, phone: str) -> List[FieldCandidate]:
    scored: List[FieldCandidate] = []
    for i, line in enumerate(lines[:CONFIG.name_scan_lines]):
        raw = line.strip()
        if BAD_NAME_RE.search(raw) or TRAILING_PUNCT_RE.search(raw):
            continue

        cand = _strip_contact_fragments(raw, email, phone)
        parts = [p.strip() for p in SUB_CANDIDATE_SPLIT_RE.split(cand) if p.strip()]
        col = 0
        for part in parts or [cand]:
            if not part:
                continue
            # Parts come out in line order, so each lookup resumes after the last
            col = cand.find(part, col)
            score = score_as_name(part, i)
            if score > 0:
                scored.append(FieldCandidate(part, score, i, col))
            col += len(part)
    return scored


def find_name(lines: Sequence[str], email: str = "", phone: str = "") -> str:
    """
    Pick the best-scoring name among the first 15 lines.

    The already-found email and phone are removed from each line first so a
    "Jane Doe  jane@x.com" header still yields "Jane Doe". If the winner fails
    validation, it is retried truncated at its first comma or hyphen
    ("Jane Doe, MBA" -> "Jane Doe").
    """
    candidates = _collect_name_candidates(lines, email, phone)
    if not candidates:
        return ""

    best = rank_candidates(candidates)[0].value
    if validate_name(best):
        logger.debug(f"Name picked: '{best}'")
        return best
    simplified = TRUNCATE_RE.split(best)[0].strip()
    if validate_name(simplified):
        logger.debug(f"Name picked after truncation: '{simplified}'")
        return simplified
    logger.debug(f"Best name candidate '{best}' failed validation")
    return ""


def _title_case(s: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in s.lower().split())


def guess_name_from_file_name(file_name: str = "") -> str:
    """
    Last-resort name guess from the uploaded file's name.

    "john_doe_resume.pdf" -> "John Doe"
    "Resume - jane-smith.docx" -> "Jane Smith"
    """
    base = re.split(r"[\\/]", str(file_name or ""))[-1]
    stem = FILE_EXT_RE.sub("", base)
    stem = FILE_KEYWORD_RE.sub(" ", stem)
    tokens = [t for t in FILE_SEPARATOR_RE.split(stem) if t and t.lower() != "cv"]
    candidate = _title_case(" ".join(tokens))
    if validate_name(candidate):
        return candidate
    return ""

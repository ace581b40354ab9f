"""
Email finder: enumerate, repair, score and pick the candidate's address.

Raw regex matches in resume text are often corrupted in a few systematic ways:
a phone number glued in front of the address, an icon glyph rendered as a
capital letter, or the last word of a sentence fused onto the local part
("regards.jane@x.com"). Each match is repaired where a known pattern applies,
then scored by its context (labels, position, left boundary).
"""

import logging
import re
import string
from typing import List, Optional, Sequence, Set

from app.core.candidates import FieldCandidate, rank_candidates
from app.core.config import CONFIG
from app.core.text_normalization import PHONE_CHARS_RE, glued_phone_start
from app.core.validators import validate_email

logger = logging.getLogger(__name__)


EMAIL_RE = re.compile(r"(?<![A-Za-z0-9._%+-])[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# Address right after a glued phone number, optionally space-separated
GLUED_TAIL_RE = re.compile(r"\s*([A-Za-z0-9._%+-]{1,120}@[A-Za-z0-9.-]+\.[A-Za-z]{2,})")
PHONE_RUN_TRAILER = " ().+-"

SEP_BEFORE_RE = re.compile(r"[\s:|,;()\[\]{}'\"<>-]")
ICON_GLYPHS_RE = re.compile(r"[•°·Ó®©™✓■▪]")
WORD_DOT_LOCAL_RE = re.compile(r"^[A-Za-z]{3,}\.")
FIRST_SEGMENT_RE = re.compile(r"^[^.]+\.")
ICON_LOCAL_RE = re.compile(r"^[A-Z][a-z0-9._%+-]+$")
PHONE_LOCAL_RE = re.compile(r"^\+?\d{10,}[A-Za-z0-9._%+-]*$")
LEADING_PHONE_RE = re.compile(r"^\+?\d{10,}")
ALNUM_RE = re.compile(r"[A-Za-z0-9]")

EMAIL_LABEL_RE = re.compile(r"\b(?:email|e-mail)\b", re.IGNORECASE)
E_LABEL_RE = re.compile(r"\be:", re.IGNORECASE)

# Words that end up fused onto a local part from surrounding prose
FILLER_WORDS = frozenset({
    "potential",
    "regards",
    "thanks",
    "hello",
    "dear",
    "team",
    "subject",
    "from",
    "to",
    "resume",
    "profile",
})


# ============================================================================
# Left context
# ============================================================================

def _word_before_dot(line: str, start: int) -> str:
    """
    The 3+ letter word that ends in a dot right before `start`, or "".

    "Worked with Acme. bob@acme.com" -> "Acme" for the address at "bob".
    Walks backwards from the match, so each character is visited at most
    once per line.
    """
    j = start
    while j > 0 and line[j - 1].isspace():
        j -= 1
    if j == 0 or line[j - 1] != ".":
        return ""
    end = j - 1
    k = end
    while k > 0 and line[k - 1] in string.ascii_letters:
        k -= 1
    word = line[k:end]
    return word if len(word) >= 3 else ""


# ============================================================================
# Repairs
# ============================================================================

def _drop_word_dot_prefix(cand: str, left_word: str, clean_left: bool) -> Optional[str]:
    """
    "regards.jane@x.com" -> "jane@x.com"

    Fires when the first dot-segment is a filler word, when a 3+ letter word
    and dot are glued on without a separator, or when the segment repeats the
    word just before the match ("Regards. regards.jane@...").
    """
    local, _, domain = cand.partition("@")
    if not local:
        return None
    first_chunk = local.split(".")[0].lower()

    should_drop = (
        first_chunk in FILLER_WORDS
        or (not clean_left and WORD_DOT_LOCAL_RE.match(local) is not None)
        or (left_word != "" and first_chunk == left_word.lower())
    )
    if not should_drop:
        return None
    repaired = f"{FIRST_SEGMENT_RE.sub('', local, count=1)}@{domain}"
    if repaired != cand and validate_email(repaired):
        return repaired
    return None


def _drop_single_icon_letter(cand: str, after_glyph: bool, clean_left: bool) -> Optional[str]:
    """"Xjane@x.com" -> "jane@x.com" when the left side is a boundary or an icon glyph."""
    local, _, domain = cand.partition("@")
    if len(local) <= 1 or not ICON_LOCAL_RE.match(local):
        return None
    if not (clean_left or after_glyph):
        return None
    repaired = f"{local[1:]}@{domain}"
    if validate_email(repaired):
        return repaired
    return None


def _drop_leading_phone_digits(cand: str) -> Optional[str]:
    """"+15551234567jane@x.com" -> "jane@x.com" """
    local, _, domain = cand.partition("@")
    if not local or not PHONE_LOCAL_RE.match(local):
        return None
    trimmed = LEADING_PHONE_RE.sub("", local, count=1)
    if not ALNUM_RE.search(trimmed):
        return None
    repaired = f"{trimmed}@{domain}"
    if validate_email(repaired):
        return repaired
    return None


# ============================================================================
# Enumeration + scoring
# ============================================================================

def _line_score(line: str, idx: int, header_set: Set[str]) -> int:
    """Score shared by every candidate on the line: labels and position."""
    score = 0
    if EMAIL_LABEL_RE.search(line):
        score += 7
    if E_LABEL_RE.search(line):
        score += 6
    if line in header_set:
        score += 3
    if idx < CONFIG.email_top_lines:
        score += 3
    return score


def _score_email(cand: str, line_score: int, clean_left: bool, left_word: str, repaired: bool) -> int:
    score = line_score
    score += 2 if clean_left else -6
    if left_word:
        # Sentence-final word glued to the address
        score -= 8
    first_local = cand.split("@")[0].split(".")[0].lower()
    if first_local in FILLER_WORDS:
        score -= 6
    if repaired:
        score += 2
    return score


def _glued_candidates(line: str, idx: int) -> List[FieldCandidate]:
    """
    Addresses glued onto a phone number ("+15551234567johndoe@x.com").

    Every maximal run of phone characters is looked at once: the number ends
    at the run's last digit and must start at the line start or after
    whitespace.
    """
    out: List[FieldCandidate] = []
    resume_at = 0
    for m in PHONE_CHARS_RE.finditer(line):
        if m.start() < resume_at:
            continue
        end = m.start() + len(m.group(0).rstrip(PHONE_RUN_TRAILER))
        start = glued_phone_start(line, m.start(), end, lambda i: i == 0 or line[i - 1].isspace())
        if start < 0:
            continue
        tail = GLUED_TAIL_RE.match(line, end)
        if not tail:
            continue
        resume_at = tail.end()
        email = tail.group(1)
        if validate_email(email):
            out.append(FieldCandidate(email, CONFIG.glued_email_score, idx, start))
    return out


def _candidates_from_line(line: str, idx: int, header_set: Set[str]) -> List[FieldCandidate]:
    # Pass 1: phone glued to email, highly specific
    out = _glued_candidates(line, idx)

    line_score = _line_score(line, idx, header_set)
    glyph = ICON_GLYPHS_RE.search(line)
    first_glyph = glyph.start() if glyph else len(line)

    # Pass 2: every generic match, repaired where a known corruption applies
    for m in EMAIL_RE.finditer(line):
        cand = m.group(0)
        if len(cand) > CONFIG.email_max_length:
            continue
        start = m.start()
        clean_left = start == 0 or SEP_BEFORE_RE.match(line[start - 1]) is not None
        left_word = _word_before_dot(line, start)

        repaired = False
        fixed = _drop_word_dot_prefix(cand, left_word, clean_left)
        if fixed:
            cand, repaired = fixed, True
        fixed = _drop_single_icon_letter(cand, first_glyph < start, clean_left)
        if fixed:
            cand, repaired = fixed, True
        fixed = _drop_leading_phone_digits(cand)
        if fixed:
            cand, repaired = fixed, True

        score = _score_email(cand, line_score, clean_left, left_word, repaired)
        out.append(FieldCandidate(cand, score, idx, start, repaired))
    return out


def collect_email_candidates(lines: Sequence[str], header_set: Set[str]) -> List[FieldCandidate]:
    out: List[FieldCandidate] = []
    for idx, line in enumerate(lines):
        out.extend(_candidates_from_line(line, idx, header_set))
    return out


def find_email(lines: Sequence[str], header_lines: Sequence[str] = ()) -> str:
    """
    Pick the best email, searching the header block first and the whole
    document only when the header has no candidate at all.

    The first candidate (by score, then position) that validates wins. If none
    validates, the top raw candidate is returned as-is for debuggability.
    """
    header_set = set(header_lines)
    candidates = collect_email_candidates(header_lines, header_set)
    if not candidates:
        candidates = collect_email_candidates(lines, header_set)
    if not candidates:
        return ""

    ranked = rank_candidates(candidates)
    seen: Set[str] = set()
    for c in ranked:
        key = c.value.lower()
        if key in seen:
            continue
        seen.add(key)
        if validate_email(c.value):
            logger.debug(f"Email picked: '{c.value}' (score={c.score}, line={c.line_index})")
            return c.value

    logger.debug(f"No valid email; returning top raw candidate '{ranked[0].value}'")
    return ranked[0].value

"""
Text normalization for cleaning up PDF/DOCX extraction artifacts.

Resume text arrives as a loosely joined text layer: PDF text items separated by
newlines, DOCX paragraphs flattened to raw text. Contact details suffer the most:
emails get split around '@' and '.', phone digit groups get kerned apart, and
icon fonts leak stray letters next to addresses.

normalize() applies a fixed sequence of passes. Order is load-bearing: later
passes assume the cleanup done by earlier ones (e.g. the glued phone+email
repair expects digit groups to have been closed already).
"""

import re
from typing import Callable, Optional


# ============================================================================
# Shared pattern pieces
# ============================================================================

EMAIL_BODY = r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"

# Horizontal whitespace only; newlines are handled by the line passes
HSPACE = r"[^\S\n]"


# ============================================================================
# Pass patterns (in application order)
# ============================================================================

# 1. "hyper-\nconnected" -> "hyperconnected"
DEHYPHENATE_RE = re.compile(r"([A-Za-z])-\s*\n\s*([A-Za-z])")

# 3. "john @ example.com" -> "john@example.com" (also across a line break)
AT_SPACING_RE = re.compile(r"(?<!\s)\s*@\s*")

# 4. "example . com" -> "example.com"
SPACED_DOT_RE = re.compile(rf"([A-Za-z0-9.-]){HSPACE}*\.{HSPACE}*([A-Za-z]{{2,}})")

# 5. "john (at) example [dot] com" -> "john@example.com"
AT_MARKER_RE = re.compile(rf"(?<!{HSPACE}){HSPACE}*(?:\(at\)|\[at\]|\{{at\}}){HSPACE}*| at ", re.IGNORECASE)
DOT_MARKER_RE = re.compile(rf"(?<!{HSPACE}){HSPACE}*(?:\(dot\)|\[dot\]|\{{dot\}}){HSPACE}*| dot ", re.IGNORECASE)

# 6. Bullets, pipes and box glyphs used as separators
GLYPH_NOISE_RE = re.compile(r"[|•■▪]+")

# 7. "555 123 4567" -> "5551234567", also when the groups landed on separate lines
DIGIT_GAP_RE = re.compile(r"(\d)\s+(?=\d)")

# 8. Sentence end followed by a line break
SENTENCE_BREAK_RE = re.compile(r"\.\s*\n\s*")

# 9. Paragraph boundaries
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

# 11. Lines made of 1-3 stray glyphs ("•", "->", "✓")
GLYPH_LINE_RE = re.compile(r"^[^\w\s]{1,3}$", re.ASCII)

# 12. Runs of spaces/tabs
MULTI_SPACE_RE = re.compile(r"[ \t]{2,}")

# 13. "| E john@x.com" where "E" is an envelope icon rendered as a letter
ICON_LETTER_RE = re.compile(
    rf"(^|[\s:|,;()\[\]{{}}'\"<>-])[A-Z]{HSPACE}+({EMAIL_BODY})",
    re.MULTILINE,
)

# 14. "+15551234567johndoe@example.com" -> "+15551234567 johndoe@example.com"
# Maximal runs of phone characters; each run is inspected once
PHONE_CHARS_RE = re.compile(r"[\d() .+-]+")
GLUED_EMAIL_RE = re.compile(r"[A-Za-z][A-Za-z0-9._%+-]{0,119}@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# Shortest glued phone: digit, 6 phone characters, digit
MIN_GLUED_PHONE = 8


# ============================================================================
# Passes
# ============================================================================

def _dehyphenate(text: str) -> str:
    return DEHYPHENATE_RE.sub(r"\1\2", text)


def _repair_email_spacing(text: str) -> str:
    """Close gaps around '@' and spaced domain dots, then decode (at)/(dot) markers."""
    text = AT_SPACING_RE.sub("@", text)
    text = SPACED_DOT_RE.sub(r"\1.\2", text)
    text = AT_MARKER_RE.sub("@", text)
    text = DOT_MARKER_RE.sub(".", text)
    return text


def _strip_trailing_whitespace(text: str) -> str:
    return "\n".join(line.rstrip() for line in text.split("\n"))


def _drop_glyph_lines(text: str) -> str:
    return "\n".join(line for line in text.split("\n") if not GLYPH_LINE_RE.match(line.strip()))


def _drop_icon_letter(match: re.Match) -> str:
    sep, email = match.group(1), match.group(2)
    if not sep or sep.isspace():
        return f"{sep}{email}"
    return f"{sep} {email}"


def glued_phone_start(text: str, start: int, end: int, can_start: Callable[[int], bool]) -> int:
    """
    Leftmost index where a phone number ending at `end` can begin inside the
    phone-character run text[start:end], or -1.

    The number is an optional leading '+', a digit, then at least 7 more
    characters. No '+' may follow the first digit, so the search begins at the
    last '+' of the run. `can_start(i)` checks the boundary before index i.
    """
    plus = text.rfind("+", start, end)
    i = start if plus < 0 else plus
    while i < end:
        first = i + 1 if text[i] == "+" else i
        if end - first < MIN_GLUED_PHONE:
            return -1
        if text[first].isdecimal() and can_start(i):
            return i
        i += 1
    return -1


def _space_glued_email(match: re.Match) -> str:
    text, run, end = match.string, match.group(0), match.end()
    if not run[-1].isdecimal():
        return run

    def can_start(i: int) -> bool:
        return i == 0 or not (text[i - 1].isascii() and text[i - 1].isalnum())

    if glued_phone_start(text, match.start(), end, can_start) < 0:
        return run
    if not GLUED_EMAIL_RE.match(text, end):
        return run
    return run + " "


def _split_glued_phone_email(text: str) -> str:
    return PHONE_CHARS_RE.sub(_space_glued_email, text)


# ============================================================================
# Public API
# ============================================================================

def normalize(raw: Optional[str]) -> str:
    """
    Clean raw extracted resume text. Pure and total: None becomes "".

    Pipeline:
    1. De-hyphenate line-wrapped words
    2. Non-breaking spaces -> spaces
    3-5. Email spacing: '@' gaps, spaced domain dots, (at)/(dot) markers
    6. Bullet/pipe/glyph noise -> space
    7. Close whitespace between digits, line breaks included
    8. Sentence-final period keeps exactly one following line break
    9. 3+ newlines -> 2
    10. Trailing whitespace per line
    11. Drop stray glyph-only lines
    12. Collapse space/tab runs
    13. Drop an icon letter sitting in front of an email
    14. Separate a phone number glued to a following email

    Examples:
    - "hyper-\\nconnected" -> "hyperconnected"
    - "jane (at) mail (dot) com" -> "jane@mail.com"
    - "+15551234567johndoe@example.com" -> "+15551234567 johndoe@example.com"
    """
    t = "" if raw is None else str(raw)

    t = _dehyphenate(t)
    t = t.replace("\u00a0", " ")
    t = _repair_email_spacing(t)
    t = GLYPH_NOISE_RE.sub(" ", t)
    t = DIGIT_GAP_RE.sub(r"\1", t)
    t = SENTENCE_BREAK_RE.sub(".\n", t)
    t = EXCESS_NEWLINES_RE.sub("\n\n", t)
    t = _strip_trailing_whitespace(t)
    t = _drop_glyph_lines(t)
    t = MULTI_SPACE_RE.sub(" ", t)

    # Contact-token repairs run last, on fully cleaned text
    t = ICON_LETTER_RE.sub(_drop_icon_letter, t)
    t = _split_glued_phone_email(t)

    return t.strip()

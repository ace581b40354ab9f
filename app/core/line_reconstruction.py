"""
Line reconstruction for normalized resume text.

Text extraction breaks lines wherever the source layout did: an address can be
split across two PDF text items, a phone number's digit groups can land on
separate lines, and a name set in large type often comes out one word per line.
These passes re-stitch those tokens so every field finder sees whole values.
"""

import logging
import re
from typing import List

from app.core.config import CONFIG

logger = logging.getLogger(__name__)


LINE_SPLIT_RE = re.compile(r"\n+")
EMAIL_LOCAL_END_RE = re.compile(r"[A-Za-z0-9._%+-]$")
# "@example.com", or a domain label followed by a dot ("ple.com", "doe.smith@...")
EMAIL_CONTINUATION_RE = re.compile(r"^(?:@|[A-Za-z0-9.-]+\.)")
DIGIT_RE = re.compile(r"[0-9]")
GLYPH_TOKEN_RE = re.compile(r"^[^\w]{1,3}$", re.ASCII)
NAME_TOKEN_RE = re.compile(r"^[A-Za-z'’-]+$")
WHITESPACE_RE = re.compile(r"\s+")


def _continues_email(cur: str, nxt: str) -> bool:
    """
    Check whether `nxt` looks like the rest of an address that starts at the end of `cur`.

    Examples:
    - "jane.doe" | "@example.com"         -> True
    - "jane.doe@exam" | "ple.com"         -> True (domain split)
    - "jane." | "doe.smith@example.com"   -> True (local part split)
    - "X" | "jane.doe@example.com"        -> True (icon letter; repaired later)
    - "jane.doe@example" | ".com"         -> False (a bare TLD is not a label)

    The rule only looks at the two line edges, so a line ending in a word
    above an address with a dotted local part is merged as well:
    "Jane Doe" | "jane.doe@example.com" -> "JaneDoejane.doe@example.com".
    """
    return (
        EMAIL_LOCAL_END_RE.search(cur) is not None
        and EMAIL_CONTINUATION_RE.match(nxt) is not None
        and len(cur) + len(nxt) < CONFIG.stitch_max_length
    )


def stitch_broken_emails(lines: List[str]) -> List[str]:
    out: List[str] = []
    i = 0
    while i < len(lines):
        cur = lines[i]
        nxt = lines[i + 1] if i + 1 < len(lines) else ""
        if nxt and _continues_email(cur, nxt):
            merged = WHITESPACE_RE.sub("", cur + nxt)
            logger.debug(f"Stitched email across lines {i}-{i + 1}: '{merged}'")
            out.append(merged)
            i += 2
            continue
        out.append(cur)
        i += 1
    return out


def stitch_broken_phones(lines: List[str]) -> List[str]:
    """
    Re-join a phone number whose digit groups were split across two lines.

    The merge is kept only when the result has a phone-like digit count. Two
    unrelated numeric lines (a year followed by a numbered item) can still pass
    that check; this is a known false positive of the heuristic.
    """
    out: List[str] = []
    i = 0
    while i < len(lines):
        cur = lines[i]
        nxt = lines[i + 1] if i + 1 < len(lines) else ""
        if cur and nxt and DIGIT_RE.match(cur[-1]) and DIGIT_RE.match(nxt[0]):
            merged = f"{cur} {nxt}"
            digits = len(DIGIT_RE.findall(merged))
            if CONFIG.phone_min_digits <= digits <= CONFIG.phone_max_digits:
                logger.debug(f"Stitched phone across lines {i}-{i + 1}: '{merged}'")
                out.append(merged)
                i += 2
                continue
        out.append(cur)
        i += 1
    return out


def combine_top_name_lines(lines: List[str]) -> List[str]:
    """
    Join a name printed one word per line at the top of the document.

    ["JOHN", "•", "SMITH", "john@x.com"] -> ["JOHN SMITH", "john@x.com"]

    Only 2-4 consecutive single-word lines are joined. Otherwise the scanned
    lines are kept as they were, minus the glyph-only ones.
    """
    out = list(lines)
    head: List[str] = []
    consumed = 0

    for raw in out[:CONFIG.top_name_scan_lines]:
        tok = raw.strip()
        if not tok:
            break
        if GLYPH_TOKEN_RE.match(tok):
            consumed += 1
            continue
        if NAME_TOKEN_RE.match(tok):
            head.append(tok)
            consumed += 1
            continue
        break

    if CONFIG.top_name_min_tokens <= len(head) <= CONFIG.top_name_max_tokens:
        logger.debug(f"Combined {len(head)} top lines into name line '{' '.join(head)}'")
        out[0:consumed] = [" ".join(head)]
    elif consumed > 0:
        out[0:consumed] = [l for l in out[:consumed] if not GLYPH_TOKEN_RE.match(l.strip())]
    return out


def dedupe_adjacent(lines: List[str]) -> List[str]:
    out: List[str] = []
    for line in lines:
        if not out or out[-1] != line:
            out.append(line)
    return out


def reconstruct_lines(text: str) -> List[str]:
    """
    Split normalized text into the canonical line sequence.

    Steps: split + trim, stitch emails, stitch phones, combine top name lines,
    collapse adjacent duplicates. Order of the input is preserved.
    """
    lines = [l.strip() for l in LINE_SPLIT_RE.split(text or "")]
    lines = [l for l in lines if l]

    lines = stitch_broken_emails(lines)
    lines = stitch_broken_phones(lines)
    lines = combine_top_name_lines(lines)
    return dedupe_adjacent(lines)

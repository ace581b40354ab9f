from io import BytesIO
from itertools import groupby
import logging
import re
from typing import Any, Dict, List, Sequence, Tuple

import pdfplumber

from app.core.errors import ExtractionError

logger = logging.getLogger(__name__)


# Candidate x_tolerance values, tried per page; the cleanest text wins
X_TOLERANCES = (1.5, 2, 2.5, 3)
# Words whose tops round to the same bucket share a visual line
LINE_BUCKET = 3
ALPHA_RUN_RE = re.compile(r"[A-Za-z]+")


def _line_bucket(word: Dict[str, Any]) -> int:
    return round(word["top"] / LINE_BUCKET)


def _page_lines(page: Any, x_tolerance: float) -> str:
    """
    Rebuild a page's visual lines from pdfplumber word boxes.

    A contact header laid out as separate text items ("Jane Doe", "|",
    "jane@x.com") comes back as one line, read left to right.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=2,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    words = sorted(words, key=lambda w: (_line_bucket(w), w["x0"]))
    return "\n".join(
        " ".join(w["text"] for w in group)
        for _, group in groupby(words, key=_line_bucket)
    )


def _artifact_score(text: str) -> float:
    """
    Penalty for extraction artifacts; lower is better.

    Long letter runs (18+) mean words were glued together. A pile of
    single letters means characters were split apart. A few single letters
    are normal (initials, icon glyphs read as letters).
    """
    runs = ALPHA_RUN_RE.findall(text)
    if not runs:
        return 1e9
    glued = sum(1 for r in runs if len(r) >= 18)
    singles = sum(1 for r in runs if len(r) == 1)
    return glued * 10 + max(0, singles - 10) * 3


def _best_page_text(page: Any, tolerances: Sequence[float] = X_TOLERANCES) -> Tuple[str, float]:
    scored = []
    for xt in tolerances:
        text = _page_lines(page, xt)
        scored.append((_artifact_score(text), xt, text))
    _, xt, text = min(scored, key=lambda s: s[0])
    return text, xt


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Deterministically extract the text layer of a PDF.

    Lines within a page are joined with newlines, pages with a blank line.
    Image-only PDFs yield an empty string (no OCR).
    """
    pages: List[str] = []
    try:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            for page_no, page in enumerate(pdf.pages, start=1):
                text, xt = _best_page_text(page)
                logger.debug(f"PDF page {page_no}: x_tolerance={xt}, {len(text)} chars")
                pages.append(text)
    except Exception as e:
        raise ExtractionError(f"Could not read PDF: {e}") from e

    return "\n\n".join(p for p in pages if p.strip())

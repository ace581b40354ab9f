from io import BytesIO
from typing import List

from docx import Document
from docx.table import Table

from app.core.errors import ExtractionError


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Deterministically extract the raw text of a DOCX in document order.

    Paragraphs and table cells (resume headers are often laid out in tables)
    each become one line. Empty blocks are skipped.
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except Exception as e:
        raise ExtractionError(f"Could not open DOCX: {e}") from e

    out: List[str] = []
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                for cell in row.cells:
                    t = (cell.text or "").strip()
                    if t:
                        out.append(t)
            continue
        t = (block.text or "").strip()
        if t:
            out.append(t)
    return "\n".join(out)

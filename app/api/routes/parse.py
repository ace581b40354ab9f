import logging

from fastapi import APIRouter, UploadFile, File, HTTPException

from app.core.docx_extractor import extract_docx_text
from app.core.errors import ExtractionError
from app.core.pdf_extractor import extract_pdf_text
from app.core.resume_parser import build_parse_response
from app.core.schemas import ParseResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
LEGACY_DOC_CONTENT_TYPE = "application/msword"


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse Resume Contact Fields",
    description="Extract the candidate's name, email and phone from a resume file (PDF or DOCX). Returns the fields, the ones still missing, and per-field confidence.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "result": {
                            "name": "Jane Doe",
                            "email": "jane.doe@example.com",
                            "phone": "5551234567",
                            "debug": {
                                "headerPreview": ["Jane Doe", "jane.doe@example.com", "Phone: 5551234567"],
                                "firstLinesPreview": ["Jane Doe", "jane.doe@example.com", "Phone: 5551234567", "Experience"]
                            }
                        },
                        "missing": [],
                        "confidence_scores": {},
                        "parse_quality": "high",
                        "warnings": [],
                        "source": "pdf"
                    }
                }
            }
        },
        400: {"description": "Empty file uploaded"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File could not be read or has no extractable text"}
    }
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (PDF or DOCX format)")
):
    """
    Parse a resume file and extract the candidate's contact fields.

    **Supported formats:**
    - PDF (.pdf) - Text-layer extraction only, OCR not supported
    - DOCX (.docx)

    **Returns:**
    - **result**: name, email, phone ("" when not found) and debug line previews
    - **missing**: fields that failed validation and should be collected in chat
    - **confidence_scores**: Per-field confidence metadata
    - **parse_quality**: Overall quality assessment (high/medium/low)
    - **warnings**: Any warnings during parsing
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").lower()

    if filename.endswith(".doc") or content_type == LEGACY_DOC_CONTENT_TYPE:
        raise HTTPException(status_code=415, detail="Legacy .doc files aren't supported. Please upload a PDF or DOCX.")

    # DOCX
    if filename.endswith(".docx") or content_type == DOCX_CONTENT_TYPE:
        source = "docx"
        extract = extract_docx_text
    # PDF
    elif filename.endswith(".pdf") or content_type == "application/pdf":
        source = "pdf"
        extract = extract_pdf_text
    else:
        raise HTTPException(status_code=415, detail="Unsupported file type. Please upload a PDF or DOCX.")

    try:
        text = extract(raw)
    except ExtractionError as e:
        logger.warning(f"Extraction failed for '{file.filename}': {e}")
        raise HTTPException(status_code=422, detail=f"Failed to extract text from the {source.upper()} file.")

    if not text.strip():
        raise HTTPException(
            status_code=422,
            detail=f"{source.upper()} appears to have no extractable text. OCR is not supported."
        )

    return build_parse_response(text, file_name_hint=file.filename or "", source=source)

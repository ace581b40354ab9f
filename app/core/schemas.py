from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal


ParseQuality = Literal["high", "medium", "low"]
ConfidenceScore = float  # 0.0 to 1.0


class ParseDebug(BaseModel):
    """Diagnostic previews for human display only."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    header_preview: List[str] = Field(default_factory=list, alias="headerPreview", description="First lines of the header block")
    first_lines_preview: List[str] = Field(default_factory=list, alias="firstLinesPreview", description="First reconstructed document lines")


class ParseResult(BaseModel):
    """Contact fields recovered from one resume. Empty string means not found."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    debug: ParseDebug = Field(default_factory=ParseDebug)


class FieldConfidence(BaseModel):
    """Per-field confidence metadata. Tracks why confidence is what it is."""
    field_name: str
    confidence: float = Field(..., ge=0.0, le=1.0, description="0.0 (no confidence) to 1.0 (absolute certainty)")
    extraction_method: str = Field(..., description="How it was extracted (e.g., 'header_block', 'document_body', 'file_name')")
    reasons: List[str] = Field(default_factory=list, description="Why confidence is this value")
    required: bool = Field(default=True, description="Is this field required for 'high' parse quality?")


class ParseResponse(BaseModel):
    result: ParseResult
    missing: List[str] = Field(default_factory=list, description="Fields that failed validation and must be collected from the candidate")
    confidence_scores: Dict[str, FieldConfidence] = Field(
        default_factory=dict,
        description="Confidence metadata for each field"
    )
    parse_quality: ParseQuality
    warnings: List[str] = Field(default_factory=list)
    source: Literal["docx", "pdf", "user"] = "user"

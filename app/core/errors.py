class ExtractionError(Exception):
    """The uploaded file could not be read as a PDF/DOCX text layer."""

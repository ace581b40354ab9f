from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from app.api.routes.parse import router as parse_router

SERVICE_NAME = "resume-contact-extractor"
VERSION = "0.1.0"

TAGS_METADATA = [
    {"name": "parse", "description": "Upload a resume and recover the candidate's contact fields"},
    {"name": "health", "description": "Liveness probes"},
]

app = FastAPI(
    title="Resume Contact Extractor",
    description="Recovers a candidate's name, email and phone from PDF/DOCX resumes, with per-field confidence",
    version=VERSION,
    openapi_tags=TAGS_METADATA,
)

app.include_router(parse_router)


@app.get("/", tags=["health"])
def root():
    return {"service": SERVICE_NAME, "status": "running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


def custom_openapi():
    """Build the schema once and cache it on the app."""
    if not app.openapi_schema:
        app.openapi_schema = get_openapi(
            title="Resume Contact Extractor API",
            version=VERSION,
            description="Contact-field extraction for candidate intake. Fields that cannot be "
                        "validated are listed under `missing` so the caller can ask for them.",
            routes=app.routes,
            tags=TAGS_METADATA,
        )
    return app.openapi_schema


app.openapi = custom_openapi

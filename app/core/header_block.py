import logging
from typing import List

from app.core.config import CONFIG

logger = logging.getLogger(__name__)


# Common resume section headings; the first one closes the contact header
SECTION_HEADINGS = (
    "summary",
    "objective",
    "skills",
    "technical skills",
    "key skills",
    "experience",
    "work experience",
    "professional experience",
    "projects",
    "education",
    "certifications",
    "achievements",
    "publications",
    "interests",
    "hobbies",
    "languages",
    "profile",
)


def is_section_heading(line: str) -> bool:
    """
    Match "Experience", "SKILLS: Python", "Education - 2020" or "Section: Projects".
    Plain mentions inside a sentence do not count.
    """
    s = line.strip().lower()
    return any(
        s == h
        or s.startswith(h + ":")
        or s.startswith(h + " -")
        or s == "section: " + h
        for h in SECTION_HEADINGS
    )


def extract_header_block(lines: List[str]) -> List[str]:
    """
    Return the leading lines before the first section heading.

    Without a heading, the first 10 lines are used. Either way the block is
    capped at 12 lines.
    """
    end = next((i for i, line in enumerate(lines) if is_section_heading(line)), None)
    if end is None:
        end = min(CONFIG.header_fallback_lines, len(lines))
        logger.debug(f"No section heading found; header block is first {end} lines")
    else:
        logger.debug(f"Section heading at line {end}: '{lines[end]}'")
    return lines[:min(end, CONFIG.header_max_lines)]

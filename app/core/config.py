"""
Centralized thresholds for the contact-field extraction pipeline.

Values referenced by more than one module, or that bound the heuristics'
search space, live here. Pattern tables (section headings, filler words,
bad-name words) stay next to the code that matches them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Key thresholds controlling extraction behavior.

    Frozen: treat as read-only at runtime. To experiment with different
    values, build a new instance and pass it through explicitly.
    """

    # ------------------------------------------------------------------
    # Header block
    # ------------------------------------------------------------------
    # Lines taken when no section heading is found.
    header_fallback_lines: int = 10
    # Hard cap on the header block, heading found or not.
    header_max_lines: int = 12

    # ------------------------------------------------------------------
    # Line reconstruction
    # ------------------------------------------------------------------
    top_name_scan_lines: int = 6       # Lines examined when re-joining a split name
    top_name_min_tokens: int = 2
    top_name_max_tokens: int = 4
    stitch_max_length: int = 120       # Longest email line a stitch may produce

    # ------------------------------------------------------------------
    # Email
    # ------------------------------------------------------------------
    email_max_length: int = 120        # Longer regex matches are noise
    glued_email_score: int = 15        # Fixed score for phone+email glue matches
    email_top_lines: int = 12          # Lines earning the "near top" bonus

    # ------------------------------------------------------------------
    # Phone
    # ------------------------------------------------------------------
    phone_min_digits: int = 10
    phone_max_digits: int = 15

    # ------------------------------------------------------------------
    # Name
    # ------------------------------------------------------------------
    name_scan_lines: int = 15          # Lines examined per find_name call
    name_fallback_lines: int = 25      # Second window when the header has no name
    name_min_tokens: int = 2
    name_max_tokens: int = 5
    name_top_bonus: int = 5            # Positional bonus for line 0, minus one per line

    # ------------------------------------------------------------------
    # Debug previews
    # ------------------------------------------------------------------
    header_preview_size: int = 8
    first_lines_preview_size: int = 15


# Singleton used by all modules.  Import this, not ParserConfig.
CONFIG = ParserConfig()

"""Input validation and size bounding for analysis requests."""
from typing import Optional, Tuple

from .config import Settings
from .errors import MissingCredential, MissingInput

RESUME_MAX_CHARS = 35000
JOB_DESCRIPTION_MAX_CHARS = 15000


def clip(text: Optional[str], max_chars: int) -> str:
    """Cut text to max_chars and append a truncation marker when it was longer."""
    t = text or ""
    if len(t) <= max_chars:
        return t
    return t[:max_chars] + f"\n\n[TRUNCATED to {max_chars} chars]"


def accept(resume_text: Optional[str], job_description: Optional[str], settings: Settings) -> Tuple[str, str]:
    if not resume_text or not job_description:
        raise MissingInput()
    if not settings.has_key:
        raise MissingCredential()
    return clip(resume_text, RESUME_MAX_CHARS), clip(job_description, JOB_DESCRIPTION_MAX_CHARS)

import pytest

from app.config import Settings  # type: ignore
from app.errors import MissingCredential, MissingInput  # type: ignore
from app.gateway import JOB_DESCRIPTION_MAX_CHARS, RESUME_MAX_CHARS, accept, clip  # type: ignore


def test_clip_leaves_short_text_alone():
    assert clip("hello", 5) == "hello"
    assert clip(None, 5) == ""


def test_clip_appends_marker():
    assert clip("abcdefgh", 3) == "abc\n\n[TRUNCATED to 3 chars]"


def test_accept_checks_input_before_credential():
    with pytest.raises(MissingInput):
        accept("", "jd", Settings())
    with pytest.raises(MissingCredential):
        accept("resume", "jd", Settings())


def test_accept_truncates_to_limits():
    resume, jd = accept("r" * (RESUME_MAX_CHARS + 1), "j" * JOB_DESCRIPTION_MAX_CHARS, Settings(groq_api_key="k"))
    assert resume.endswith(f"[TRUNCATED to {RESUME_MAX_CHARS} chars]")
    assert resume.startswith("r" * RESUME_MAX_CHARS + "\n\n")
    assert jd == "j" * JOB_DESCRIPTION_MAX_CHARS

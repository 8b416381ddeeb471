from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Any, Dict, List, Optional, Literal

RUBRIC_CAPS = {"skills": 40, "experience": 35, "projects": 15, "ats": 10}
IMPACTS = ("high", "medium", "low")


class AnalyzeRequest(BaseModel):
    # Optional here so a missing field is reported as MissingInput (400), not a 422
    resumeText: Optional[str] = None
    jobDescription: Optional[str] = None

    @field_validator("resumeText", "jobDescription", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class HealthOut(BaseModel):
    ok: bool
    port: int
    hasKey: bool
    keyPrefix: str
    python: str


# ----- Analysis result (shape requested from the scoring model) -----
class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow")


class RubricItem(_Lenient):
    score: float = 0
    max: int = 0
    notes: str = ""
    evidence: List[str] = Field(default_factory=list)


class Rubric(_Lenient):
    skills: RubricItem = Field(default_factory=lambda: RubricItem(max=40))
    experience: RubricItem = Field(default_factory=lambda: RubricItem(max=35))
    projects: RubricItem = Field(default_factory=lambda: RubricItem(max=15))
    ats: RubricItem = Field(default_factory=lambda: RubricItem(max=10))


class MissingSkills(_Lenient):
    required: List[str] = Field(default_factory=list)
    preferred: List[str] = Field(default_factory=list)


class KeywordCoverage(_Lenient):
    coveragePct: float = 0
    found: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)


class TopFix(_Lenient):
    impact: str = "medium"
    action: str = ""
    example: str = ""

    @field_validator("impact", mode="before")
    @classmethod
    def _known_impact(cls, value: Any) -> str:
        value = str(value).strip().lower() if value is not None else ""
        return value if value in IMPACTS else "medium"


class BulletRewrite(_Lenient):
    original: str = ""
    rewrite: str = ""
    why: str = ""


class InterviewPrep(_Lenient):
    likelyQuestions: List[str] = Field(default_factory=list)
    yourSTARPrompts: List[str] = Field(default_factory=list)


class CoverLetter(_Lenient):
    draft: str = ""


class AnalysisResult(_Lenient):
    overallScore: float = 0
    rubric: Rubric = Field(default_factory=Rubric)
    missingSkills: MissingSkills = Field(default_factory=MissingSkills)
    keywordCoverage: KeywordCoverage = Field(default_factory=KeywordCoverage)
    topFixes: List[TopFix] = Field(default_factory=list)
    bulletRewrites: List[BulletRewrite] = Field(default_factory=list)
    interviewPrep: InterviewPrep = Field(default_factory=InterviewPrep)
    coverLetter: CoverLetter = Field(default_factory=CoverLetter)


_SECTIONS = {
    "missingSkills": MissingSkills,
    "keywordCoverage": KeywordCoverage,
    "interviewPrep": InterviewPrep,
    "coverLetter": CoverLetter,
}
_ITEM_LISTS = {"topFixes": TopFix, "bulletRewrites": BulletRewrite}


def _section(model, value, **defaults):
    try:
        return model.model_validate(value)
    except ValidationError:
        return model(**defaults)


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def repair_analysis(data: Dict[str, Any]) -> AnalysisResult:
    """
    Rebuild an AnalysisResult one section at a time.

    A section that fails validation falls back to its default, invalid list
    items are dropped, unknown keys are kept as-is, and every score is clamped
    to its rubric cap.
    """
    fields: Dict[str, Any] = {}
    for name, value in data.items():
        if name == "overallScore":
            fields[name] = _number(value)
        elif name == "rubric":
            raw = value if isinstance(value, dict) else {}
            items = {k: v for k, v in raw.items() if k not in RUBRIC_CAPS}
            for key, cap in RUBRIC_CAPS.items():
                items[key] = _section(RubricItem, raw.get(key, {}), max=cap)
            fields[name] = Rubric(**items)
        elif name in _SECTIONS:
            fields[name] = _section(_SECTIONS[name], value)
        elif name in _ITEM_LISTS:
            model = _ITEM_LISTS[name]
            kept = []
            for item in value if isinstance(value, list) else []:
                try:
                    kept.append(model.model_validate(item))
                except ValidationError:
                    continue
            fields[name] = kept
        else:
            fields[name] = value

    result = AnalysisResult(**fields)
    for key, cap in RUBRIC_CAPS.items():
        item = getattr(result.rubric, key)
        item.max = cap
        item.score = max(0, min(cap, item.score))
    result.overallScore = max(0, min(100, result.overallScore))
    result.keywordCoverage.coveragePct = max(0, min(100, result.keywordCoverage.coveragePct))
    return result


# Strict variants used by the "reject" policy: every section must be present.
class StrictRubricItem(BaseModel):
    score: float = Field(ge=0)
    max: int
    notes: str
    evidence: List[str]


class StrictRubric(BaseModel):
    skills: StrictRubricItem
    experience: StrictRubricItem
    projects: StrictRubricItem
    ats: StrictRubricItem


class StrictTopFix(BaseModel):
    impact: Literal["high", "medium", "low"]
    action: str
    example: str = ""


class StrictAnalysisResult(BaseModel):
    overallScore: float = Field(ge=0, le=100)
    rubric: StrictRubric
    missingSkills: MissingSkills
    keywordCoverage: KeywordCoverage
    topFixes: List[StrictTopFix]
    bulletRewrites: List[BulletRewrite]
    interviewPrep: InterviewPrep
    coverLetter: Optional[CoverLetter] = None

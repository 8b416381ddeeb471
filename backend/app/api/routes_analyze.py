import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..ai_services import get_ai_service
from ..config import Settings, get_settings
from ..errors import AnalyzerError
from ..gateway import accept
from ..schemas import AnalyzeRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])


@router.post("/analyze")
@router.post("/api/analyze")
async def analyze(body: AnalyzeRequest, settings: Settings = Depends(get_settings)):
    """Score a resume against a job description and draft a cover letter."""
    try:
        resume_safe, jd_safe = accept(body.resumeText, body.jobDescription, settings)
        service = get_ai_service(settings)
        return await service.analyze(resume_safe, jd_safe)
    except AnalyzerError:
        raise
    except Exception as e:
        logger.exception("Server exception during analysis")
        return JSONResponse(status_code=500, content={"error": "Server exception", "detail": str(e)})

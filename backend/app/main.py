import logging
import platform
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ENV_PATH, Settings, get_settings
from .errors import AnalyzerError, InvalidInput, MissingInput, PayloadTooLarge
from .schemas import HealthOut

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 5 * 1024 * 1024


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings)
    # Never log the key itself
    logger.info("dotenv path: %s", ENV_PATH)
    logger.info("GROQ_API_KEY loaded: %s", settings.has_key)
    logger.info("GROQ_API_KEY prefix: %s", settings.key_prefix)
    logger.info("GROQ_API_KEY length: %d", len(settings.groq_api_key or ""))
    yield


app = FastAPI(title="Resume Analyzer Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class BodySizeLimitMiddleware:
    """Reject request bodies over max_bytes, declared or streamed, with a 413."""

    def __init__(self, app, max_bytes: int = MAX_BODY_BYTES):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = dict(scope.get("headers") or []).get(b"content-length")
        if length is not None:
            if length.isdigit() and int(length) > self.max_bytes:
                await self._reject(scope, receive, send)
            else:
                await self.app(scope, receive, send)
            return

        # Chunked body: buffer it up to the limit, then replay it downstream
        messages = []
        size = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            size += len(message.get("body", b""))
            if size > self.max_bytes:
                await self._reject(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay():
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope, receive, send):
        err = PayloadTooLarge()
        response = JSONResponse(status_code=err.status_code, content=err.to_body())
        await response(scope, receive, send)


app.add_middleware(BodySizeLimitMiddleware, max_bytes=MAX_BODY_BYTES)


@app.exception_handler(AnalyzerError)
async def analyzer_error_handler(request: Request, exc: AnalyzerError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = ("resumeText", "jobDescription")
    bad = [e for e in exc.errors() if len(e.get("loc", ())) > 1 and e["loc"][1] in fields]
    if bad:
        err = InvalidInput(detail=[f"{e['loc'][1]}: {e['msg']}" for e in bad])
    else:
        # A missing or non-object body is the same client mistake as missing fields
        err = MissingInput()
    return JSONResponse(status_code=err.status_code, content=err.to_body())


@app.get("/health", response_model=HealthOut)
def health(settings: Settings = Depends(get_settings)):
    return HealthOut(
        ok=True,
        port=settings.port,
        hasKey=settings.has_key,
        keyPrefix=settings.key_prefix,
        python=platform.python_version(),
    )


from .api.routes_analyze import router as analyze_router
app.include_router(analyze_router)


def run() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"API server running on http://localhost:{settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.router import limiter, router
from config import settings
from services.errors import ErrorCode, OptimizerError

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.RATE_LIMITED: 429,
    ErrorCode.LLM_TIMEOUT: 504,
    ErrorCode.LLM_ERROR: 502,
}

app = FastAPI(
    title="ATS Resume Optimizer API",
    description="Keyword matching, ATS scoring and AI-assisted resume suggestions",
    version="1.0.0",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OptimizerError)
async def optimizer_error_handler(request: Request, exc: OptimizerError):
    return JSONResponse(status_code=STATUS_BY_CODE[exc.code], content=exc.to_payload())


app.include_router(router)

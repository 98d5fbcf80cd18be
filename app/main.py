import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from app.api.v1.health import router as health_router
from app.api.v1.assessment import router as assessment_router
from app.api.v1.career import router as career_router
from app.api.v1.analytics import router as analytics_router
from app.career.errors import CareerAnalysisError
from app.core.cors import cors_allowed_origins
from app.core.rate_limit import limiter
from app.core.config import settings
from dotenv import load_dotenv
from app.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Career Guidance API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _career_error_handler(request: Request, exc: CareerAnalysisError) -> JSONResponse:
    _ = request
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "code": exc.code})


app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(CareerAnalysisError, _career_error_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(assessment_router, prefix="/v1", tags=["Assessment"])
app.include_router(career_router, prefix="/v1", tags=["Career"])
app.include_router(analytics_router, prefix="/v1", tags=["Analytics"])

from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_settings, check_settings_on_startup, logger
from exceptions import FactCheckException
from middleware.context import RequestContextMiddleware, get_request_id
from models import (
    FactCheckRequest,
    FactCheckResult,
    Identity,
    ImageExtractionRequest,
    ImageExtractionResponse,
    PlanLimits,
)
from services import (
    FactCheckPipeline,
    GeminiClient,
    ImageTextExtractor,
    InMemoryUserStore,
    QuotaGate,
    TokenVerifier,
)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Wire the pipeline and its collaborators from one settings object."""
    settings = settings or get_settings()

    app = FastAPI(title="Post Credibility API")
    client = GeminiClient(settings)
    app.state.settings = settings
    app.state.pipeline = FactCheckPipeline(client, settings)
    app.state.image_extractor = ImageTextExtractor(client, settings)
    app.state.quota = QuotaGate(InMemoryUserStore(), settings)
    app.state.verifier = TokenVerifier(settings)

    @app.on_event("startup")
    async def startup_event():
        check_settings_on_startup(settings)

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FactCheckException)
    async def fact_check_exception_handler(request: Request, exc: FactCheckException):
        if exc.status_code >= 500:
            logger.error("Request %s failed: %s", get_request_id(), exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid input"})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error for request %s", get_request_id())
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    def identify(request: Request, authorization: Optional[str] = Header(None)) -> Identity:
        return request.app.state.verifier.verify(authorization)

    @app.get("/")
    @app.get("/health")
    async def health_check():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.post("/api/fact-check", response_model=FactCheckResult)
    async def fact_check(req: FactCheckRequest, request: Request, identity: Identity = Depends(identify)):
        """Grounded credibility assessment of a single post."""
        await request.app.state.quota.consume(identity)
        return await request.app.state.pipeline.run(
            req.text,
            images=req.images,
            post_date=req.post_date,
            claims=req.claims,
        )

    @app.post(
        "/api/image-extraction",
        response_model=ImageExtractionResponse,
        response_model_exclude_none=True,
    )
    async def image_extraction(req: ImageExtractionRequest, request: Request, identity: Identity = Depends(identify)):
        await request.app.state.quota.consume(identity)
        return await request.app.state.image_extractor.run(req.images, extract_claims=req.extract_claims)

    @app.get("/api/me/limits", response_model=PlanLimits)
    async def limits(request: Request, identity: Identity = Depends(identify)):
        return await request.app.state.quota.limits(identity)

    return app


app = create_app()

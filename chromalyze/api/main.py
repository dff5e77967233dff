"""FastAPI entrypoint and HTTP routes."""

from fastapi import FastAPI, File, HTTPException, Query, Response, UploadFile, status
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from chromalyze.api.schemas import ColorAnalysisResponse
from chromalyze.config.settings import get_settings
from chromalyze.imgproc.normalize import ImageDecodeError
from chromalyze.services.analysis import ColorAnalysisService, UploadTooLargeError


def create_app() -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    service = ColorAnalysisService(settings)

    app = FastAPI(
        title="Chromalyze API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/metrics", tags=["system"])
    async def metrics() -> Response:
        """Expose Prometheus counters in the text format."""

        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.post("/colors", response_model=ColorAnalysisResponse, tags=["analysis"])
    async def extract_colors(
        file: UploadFile = File(...),
        color_count: int | None = Query(default=None, ge=0, le=settings.max_color_count),
    ) -> ColorAnalysisResponse:
        """Return the dominant colours of the uploaded image."""

        if file.content_type and not file.content_type.startswith("image/"):
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail="Please upload an image file.",
            )

        try:
            if file.size is not None:
                service.check_upload_size(file.size)
            image_bytes = await file.read(settings.max_upload_bytes + 1)
            analysis = await service.analyse(image_bytes, color_count)
        except UploadTooLargeError as exc:
            raise HTTPException(
                status_code=413,
                detail=str(exc),
            ) from exc
        except ImageDecodeError as exc:
            raise HTTPException(
                status_code=422,
                detail=str(exc),
            ) from exc

        return ColorAnalysisResponse.from_analysis(analysis)

    return app


app = create_app()

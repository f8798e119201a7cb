"""
FastAPI application serving connection recommendations.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Header, Query
from fastapi.responses import JSONResponse

from ..cache import RecommendationCache
from ..config import Config, setup_logging
from ..embedding import EmbeddingEngine
from ..errors import AuthenticationError, EmbeddingBackendUnavailable
from ..pipeline import RecommendationPipeline, clamp_top_k
from ..schema import ErrorResponse, HealthResponse, RecommendationResponse, parse_roles
from ..sources import Network, get_network

logger = logging.getLogger(__name__)

SERVICE_NAME = "mini-graph-recs"
GENERIC_ERROR = "Failed to compute recommendations"


def parse_top_k(raw: Optional[str], config: Config) -> int:
    """Parse ``topK``; malformed values fall back to the default, others are clamped."""
    if raw is None or raw.strip() == "":
        return clamp_top_k(None, config)
    try:
        value = int(raw.strip())
    except ValueError:
        logger.debug("Malformed topK %r, using default %d", raw, config.default_top_k)
        return clamp_top_k(None, config)
    return clamp_top_k(value, config)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def create_app(
    config: Optional[Config] = None,
    network: Optional[Network] = None,
    engine: Optional[EmbeddingEngine] = None,
    cache: Optional[RecommendationCache] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Configuration; ``Config.default()`` if omitted
        network: Data backend; built from config if omitted
        engine: Embedding engine; built from config if omitted
        cache: Result cache; built from ``cache_stale_after_seconds`` if omitted

    Returns:
        Configured FastAPI app
    """
    config = config or Config.default()
    setup_logging(config.log_level)
    network = network or get_network(config)
    pipeline = RecommendationPipeline(config, network, engine)
    cache = cache or RecommendationCache(config.cache_stale_after_seconds)

    app = FastAPI(title="Mini Graph Recs", version="0.1.0")
    app.state.config = config
    app.state.network = network
    app.state.pipeline = pipeline
    app.state.cache = cache

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", service=SERVICE_NAME)

    @app.get(
        "/recommendations",
        response_model=RecommendationResponse,
        responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def get_recommendations(
        topK: Optional[str] = Query(None),
        userId: Optional[str] = Query(None),
        targetRole: Optional[str] = Query(None),
        refresh: bool = Query(False),
        authorization: Optional[str] = Header(None),
    ):
        """
        Recommend connections for a subject.

        The subject is ``userId`` when given, otherwise the user behind the
        bearer token. Graph candidates come first, attribute matches fill
        the remaining slots.
        """
        try:
            subject_id = userId
            if not subject_id:
                subject_id = network.authenticate(bearer_token(authorization))
                if not subject_id:
                    raise AuthenticationError("Authentication required")

            top_k = parse_top_k(topK, config)
            roles = parse_roles(targetRole)
            key = cache.key(subject_id, top_k, roles)

            candidates = None if refresh else cache.get(key)
            if candidates is None:
                candidates = await pipeline.recommend(subject_id, top_k, roles)
                cache.put(key, candidates)

            return RecommendationResponse(data=candidates, count=len(candidates))
        except AuthenticationError as exc:
            return JSONResponse(status_code=401, content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True))
        except EmbeddingBackendUnavailable as exc:
            logger.error("Recommendations API error: %s", exc)
            body = ErrorResponse(error=GENERIC_ERROR, hint=exc.hint)
            return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
        except Exception:
            logger.exception("Recommendations API error")
            return JSONResponse(status_code=500, content=ErrorResponse(error=GENERIC_ERROR).model_dump(exclude_none=True))

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("graph_recs.api.main:create_app", factory=True, host="0.0.0.0", port=8000)

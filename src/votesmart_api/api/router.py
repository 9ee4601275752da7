"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from votesmart_api.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, setup_cors
from votesmart_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from votesmart_api.api.v1.campaigns import campaigns_router
    from votesmart_api.api.v1.candidates import candidates_router
    from votesmart_api.api.v1.districts import districts_router
    from votesmart_api.api.v1.health import health_router
    from votesmart_api.api.v1.parties import parties_router
    from votesmart_api.api.v1.recommendations import recommendations_router
    from votesmart_api.api.v1.regions import regions_router
    from votesmart_api.api.v1.registry import registry_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(health_router)
    root_router.include_router(registry_router)
    root_router.include_router(campaigns_router)
    root_router.include_router(parties_router)
    root_router.include_router(regions_router)
    root_router.include_router(districts_router)
    root_router.include_router(candidates_router)
    root_router.include_router(recommendations_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app."""
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.rate_limit_per_minute,
        trusted_proxy_headers=settings.trusted_proxy_header_list,
    )

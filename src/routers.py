from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from analyzers import analyzer_route

prefix_router = APIRouter()

prefix_router.include_router(analyzer_route)


@prefix_router.get(
    path="/",
    summary="Redirect to API documentation",
    description="Redirects to the interactive API documentation.",
    include_in_schema=False,
)
async def root() -> RedirectResponse:
    """Redirect to the interactive API documentation at /docs."""
    return RedirectResponse(url="/docs")

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["Admin"])


@router.get("/metrics", include_in_schema=False)
async def metrics_route() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import PlainTextResponse

from storefront.api.deps import get_access_gate
from storefront.grants import AccessGate, Unauthorized
from storefront.utils.metrics import protected_downloads_total


router = APIRouter(tags=["downloads"])


def parse_file_index(raw: str | None) -> int:
    """?file= is advisory: anything that is not an integer means file 0."""
    try:
        return int(raw) if raw else 0
    except ValueError:
        return 0


@router.get("/protected-file")
def protected_file(
    token: str | None = Query(default=None),
    file: str | None = Query(default=None),
    gate: AccessGate = Depends(get_access_gate),
) -> Response:
    """Serve the paid file to a valid token holder."""
    try:
        resource = gate.authorize(token, parse_file_index(file))
    except Unauthorized:
        protected_downloads_total.labels(result="unauthorized").inc()
        return PlainTextResponse(
            "Unauthorized or token expired",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    protected_downloads_total.labels(result="served").inc()
    return Response(
        content=resource.content,
        media_type=resource.media_type,
        headers={"Content-Disposition": resource.content_disposition},
    )

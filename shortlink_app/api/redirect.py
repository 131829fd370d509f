from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from shortlink_app.config import settings
from shortlink_app.dependencies import get_link_service
from shortlink_app.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


def get_client_ip(request: Request) -> Optional[str]:
    """
    Originating client address.

    X-Forwarded-For is only honoured when trust_forwarded_for is set,
    since any client can send it.
    """
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first
    return request.client.host if request.client else None


@router.get("/{key}")
async def redirect_to_original_url(
    key: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL.

    Flow:
    1. Resolve key (short_id or alias) -> 404 if unknown
    2. Expired? -> 410, no click recorded
    3. Record click + increment counter (one transaction)
    4. 301 to the original URL
    """
    original_url = await link_service.redirect(key, ip_address=get_client_ip(request))
    return RedirectResponse(url=original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)

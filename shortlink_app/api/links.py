from typing import List

from fastapi import APIRouter, Depends, Response, status

from shortlink_app.dependencies import get_link_service
from shortlink_app.schemas.link import (
    LinkAnalytics,
    LinkCreate,
    LinkCreated,
    LinkInfo,
    LinkSummary,
)
from shortlink_app.services.link_service import LinkService

router = APIRouter(tags=["links"])


@router.post("/shorten", response_model=LinkCreated, status_code=status.HTTP_201_CREATED)
async def create_short_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a new short link (generated short id or custom alias)"""
    link = await link_service.create_link(link_data)
    return LinkCreated(id=link.id, short_id=link.short_id)


@router.get("/all-links", response_model=List[LinkSummary])
async def list_links(link_service: LinkService = Depends(get_link_service)):
    """Every link with its click count and last five visitor IPs"""
    return await link_service.list_links()


@router.get("/info/{key}", response_model=LinkInfo)
async def get_link_info(
    key: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Original URL, creation time and click count (expired links included)"""
    return await link_service.get_info(key)


@router.get("/analytics/{key}", response_model=LinkAnalytics)
async def get_link_analytics(
    key: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Click count and the five most recent visitor IPs, newest first"""
    return await link_service.get_analytics(key)


@router.delete("/delete/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_link(
    key: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Delete a short link and its click history"""
    await link_service.delete_link(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

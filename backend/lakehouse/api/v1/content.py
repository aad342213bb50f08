"""Reviews, gallery, and contact-form router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from lakehouse.api.deps import get_store, raise_http_error
from lakehouse.booking.errors import BookingEngineError
from lakehouse.models.gallery_image import GalleryImage
from lakehouse.schemas.content import (
    ContactCreate,
    ContactResponse,
    GalleryImageResponse,
    ReviewListResponse,
)
from lakehouse.services import content_service
from lakehouse.store import BookingStore

router = APIRouter(prefix="/api/v1", tags=["content"])


@router.get(
    "/reviews",
    response_model=ReviewListResponse,
    summary="List approved reviews with rating summary",
)
async def list_reviews(
    limit: int | None = Query(None, ge=1, le=100, description="Newest N reviews only"),
    store: BookingStore = Depends(get_store),
) -> dict:
    try:
        return await content_service.list_reviews(store, limit=limit)
    except BookingEngineError as e:
        raise_http_error(e)


@router.get(
    "/gallery",
    response_model=list[GalleryImageResponse],
    summary="List gallery images",
)
async def list_gallery(
    category: str | None = Query(None, description="exterior, dock, living, kitchen, bedroom, bathroom, workspace, or all"),
    store: BookingStore = Depends(get_store),
) -> list[GalleryImage]:
    try:
        return await content_service.list_gallery(store, category)
    except BookingEngineError as e:
        raise_http_error(e)


@router.post(
    "/contact",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message to the hosts",
)
async def submit_contact(
    body: ContactCreate,
    store: BookingStore = Depends(get_store),
) -> ContactResponse:
    try:
        submission = await content_service.submit_contact(
            store, body.name, str(body.email), body.phone, body.message
        )
    except BookingEngineError as e:
        raise_http_error(e)
    return ContactResponse(id=submission.id)

"""
Photo API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status

from core.dependencies import json_body

from . import schemas, service

router = APIRouter(prefix="/photos")


@router.get("", response_model=schemas.PhotoPage)
async def list_photos(page: str | None = Query(default=None)) -> schemas.PhotoPage:
    return await service.list_page(page)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_photo(payload: Any = Depends(json_body)) -> dict:
    photo_id = await service.create(payload)
    return {"id": photo_id}


@router.get("/{photo_id}", response_model=schemas.Photo)
async def get_photo(photo_id: str) -> schemas.Photo:
    return await service.get(photo_id)


@router.put("/{photo_id}")
async def update_photo(photo_id: str, payload: Any = Depends(json_body)) -> dict:
    await service.update(photo_id, payload)
    return {}


@router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_photo(photo_id: str) -> Response:
    await service.delete(photo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

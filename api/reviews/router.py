"""
Review API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status

from core.dependencies import json_body

from . import schemas, service

router = APIRouter(prefix="/reviews")


@router.get("", response_model=schemas.ReviewPage)
async def list_reviews(page: str | None = Query(default=None)) -> schemas.ReviewPage:
    return await service.list_page(page)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(payload: Any = Depends(json_body)) -> dict:
    review_id = await service.create(payload)
    return {"id": review_id}


@router.get("/{review_id}", response_model=schemas.Review)
async def get_review(review_id: str) -> schemas.Review:
    return await service.get(review_id)


@router.put("/{review_id}")
async def update_review(review_id: str, payload: Any = Depends(json_body)) -> dict:
    await service.update(review_id, payload)
    return {}


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(review_id: str) -> Response:
    await service.delete(review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

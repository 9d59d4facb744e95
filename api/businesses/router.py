"""
Business API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status

from core.dependencies import json_body

from . import schemas, service

router = APIRouter(prefix="/businesses")


@router.get("", response_model=schemas.BusinessPage)
async def list_businesses(page: str | None = Query(default=None)) -> schemas.BusinessPage:
    return await service.list_page(page)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_business(payload: Any = Depends(json_body)) -> dict:
    business_id = await service.create(payload)
    return {"id": business_id}


@router.get("/{business_id}", response_model=schemas.BusinessDetail)
async def get_business(business_id: str) -> schemas.BusinessDetail:
    return await service.get_detail(business_id)


@router.put("/{business_id}")
async def update_business(business_id: str, payload: Any = Depends(json_body)) -> dict:
    await service.update(business_id, payload)
    return {}


@router.delete("/{business_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_business(business_id: str) -> Response:
    await service.delete(business_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

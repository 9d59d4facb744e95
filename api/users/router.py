"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import schemas, service

router = APIRouter(prefix="/users")


@router.get("/{user_id}/businesses", response_model=schemas.UserBusinesses)
async def list_user_businesses(user_id: str) -> schemas.UserBusinesses:
    return schemas.UserBusinesses(businesses=await service.businesses_for(user_id))


@router.get("/{user_id}/reviews", response_model=schemas.UserReviews)
async def list_user_reviews(user_id: str) -> schemas.UserReviews:
    return schemas.UserReviews(reviews=await service.reviews_for(user_id))


@router.get("/{user_id}/photos", response_model=schemas.UserPhotos)
async def list_user_photos(user_id: str) -> schemas.UserPhotos:
    return schemas.UserPhotos(photos=await service.photos_for(user_id))

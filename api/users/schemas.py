"""
Response models for the user views.
"""

from __future__ import annotations

from pydantic import BaseModel

from businesses.schemas import Business
from photos.schemas import Photo
from reviews.schemas import Review


class UserBusinesses(BaseModel):
    businesses: list[Business]


class UserReviews(BaseModel):
    reviews: list[Review]


class UserPhotos(BaseModel):
    photos: list[Photo]

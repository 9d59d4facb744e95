"""
Business field schema and response models.
"""

from __future__ import annotations

from pydantic import BaseModel

from core.validation import FieldSpec, coercion_model
from photos.schemas import Photo
from reviews.schemas import Review

BUSINESS_SCHEMA: dict[str, FieldSpec] = {
    "ownerid": FieldSpec(required=True, kind=int),
    "name": FieldSpec(required=True),
    "address": FieldSpec(required=True),
    "city": FieldSpec(required=True),
    "state": FieldSpec(required=True),
    "zip": FieldSpec(required=True),
    "phone": FieldSpec(required=True),
    "category": FieldSpec(required=True),
    "subcategory": FieldSpec(required=True),
    "website": FieldSpec(required=False),
    "email": FieldSpec(required=False),
}

BusinessFields = coercion_model("BusinessFields", BUSINESS_SCHEMA)


class Business(BaseModel):
    id: int
    ownerid: int
    name: str
    address: str
    city: str
    state: str
    zip: str
    phone: str
    category: str
    subcategory: str
    website: str | None = None
    email: str | None = None


class BusinessDetail(Business):
    reviews: list[Review] = []
    photos: list[Photo] = []


class BusinessPage(BaseModel):
    businesses: list[Business]
    page: int
    totalPages: int
    pageSize: int
    count: int

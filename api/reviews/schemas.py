"""
Review field schema and response models.
"""

from __future__ import annotations

from pydantic import BaseModel

from core.validation import FieldSpec, coercion_model

REVIEW_SCHEMA: dict[str, FieldSpec] = {
    "userid": FieldSpec(required=True, kind=int),
    "businessid": FieldSpec(required=True, kind=int),
    "dollars": FieldSpec(required=True, kind=int),
    "stars": FieldSpec(required=True, kind=int),
    "review": FieldSpec(required=False),
}

ReviewFields = coercion_model("ReviewFields", REVIEW_SCHEMA)


class Review(BaseModel):
    id: int
    userid: int
    businessid: int
    dollars: int
    stars: int
    review: str | None = None


class ReviewPage(BaseModel):
    reviews: list[Review]
    page: int
    totalPages: int
    pageSize: int
    count: int

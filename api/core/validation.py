"""
Declarative request-body validation.

Each resource declares its writable fields once as a mapping of field name to
`FieldSpec`. Validation only checks presence of required fields. `kind` is used
afterwards, through a pydantic model built from the same mapping, to coerce
values into what asyncpg will bind for the column.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Mapping, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, create_model

from .params import MAX_ID, MIN_INT


class ValidationError(ValueError):
    pass


@dataclass(frozen=True)
class FieldSpec:
    required: bool = False
    kind: type = str


Schema = Mapping[str, FieldSpec]


def _is_present(record: Mapping[str, Any], field: str) -> bool:
    return field in record and record[field] is not None


def validate_against_schema(record: Any, schema: Schema) -> bool:
    """
    True iff `record` is a mapping holding every required field of `schema`.
    """
    if not isinstance(record, Mapping):
        return False
    return all(_is_present(record, field) for field, spec in schema.items() if spec.required)


def extract_valid_fields(record: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """
    Copy of `record` restricted to the fields declared in `schema`.
    """
    return {field: record[field] for field in schema if field in record}


def _column_type(spec: FieldSpec) -> Any:
    # INTEGER columns: asyncpg refuses to bind anything wider.
    if spec.kind is int:
        return Annotated[int, Field(ge=MIN_INT, le=MAX_ID)]
    return spec.kind


def coercion_model(name: str, schema: Schema) -> type[BaseModel]:
    """
    Pydantic model with one nullable field per schema entry.

    Presence is already checked by `validate_against_schema`, so every field
    defaults to None here; the model only converts types (lax mode: "12" -> 12,
    97333 -> "97333").
    """
    fields: dict[str, Any] = {field: (Optional[_column_type(spec)], None) for field, spec in schema.items()}
    return create_model(
        name,
        __config__=ConfigDict(coerce_numbers_to_str=True),
        **fields,
    )


def coerce_fields(values: Mapping[str, Any], model: type[BaseModel]) -> dict[str, Any]:
    """
    Convert supplied values to their declared kinds. Keys not supplied stay absent.
    """
    try:
        parsed = model.model_validate(dict(values))
    except pydantic.ValidationError as exc:
        raise ValidationError(str(exc)) from exc
    return parsed.model_dump(exclude_unset=True)


def clean(record: Any, schema: Schema, model: type[BaseModel]) -> dict[str, Any]:
    """
    Validate, filter and coerce a request body in one step.
    """
    if not validate_against_schema(record, schema):
        raise ValidationError("Missing required field.")
    return coerce_fields(extract_valid_fields(record, schema), model)

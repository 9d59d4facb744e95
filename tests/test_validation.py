"""
Tests for the declarative request validator.
"""

import pytest

from core.validation import (
    FieldSpec,
    ValidationError,
    clean,
    coerce_fields,
    coercion_model,
    extract_valid_fields,
    validate_against_schema,
)

SCHEMA = {
    "userid": FieldSpec(required=True, kind=int),
    "name": FieldSpec(required=True),
    "note": FieldSpec(required=False),
}

FIELDS = coercion_model("TestFields", SCHEMA)


class TestValidateAgainstSchema:
    def test_all_required_present(self):
        assert validate_against_schema({"userid": 1, "name": "x"}, SCHEMA)

    def test_optional_fields_not_needed(self):
        assert validate_against_schema({"userid": 1, "name": "x", "extra": True}, SCHEMA)

    @pytest.mark.parametrize("missing", ["userid", "name"])
    def test_missing_required(self, missing):
        record = {"userid": 1, "name": "x"}
        del record[missing]
        assert not validate_against_schema(record, SCHEMA)

    def test_null_counts_as_missing(self):
        assert not validate_against_schema({"userid": None, "name": "x"}, SCHEMA)

    @pytest.mark.parametrize("record", [None, [], "userid", 3])
    def test_non_mapping_is_invalid(self, record):
        assert not validate_against_schema(record, SCHEMA)

    def test_no_type_checking(self):
        # Presence only; kinds are applied later by coerce_fields.
        assert validate_against_schema({"userid": "abc", "name": 5}, SCHEMA)


class TestExtractValidFields:
    def test_is_key_intersection(self):
        record = {"userid": 1, "name": "x", "note": "n", "admin": True}
        assert extract_valid_fields(record, SCHEMA) == {"userid": 1, "name": "x", "note": "n"}

    def test_absent_optional_not_added(self):
        assert extract_valid_fields({"userid": 1}, SCHEMA) == {"userid": 1}


class TestCoerceFields:
    def test_integer_strings(self):
        assert coerce_fields({"userid": "12"}, FIELDS) == {"userid": 12}

    def test_numbers_become_strings(self):
        assert coerce_fields({"name": 97333}, FIELDS) == {"name": "97333"}

    @pytest.mark.parametrize("value", ["abc", 1.5, [1], {"id": 1}])
    def test_bad_integer(self, value):
        with pytest.raises(ValidationError):
            coerce_fields({"userid": value}, FIELDS)

    @pytest.mark.parametrize("value", [2**31, -(2**31) - 1, "99999999999"])
    def test_integer_outside_column_range(self, value):
        with pytest.raises(ValidationError):
            coerce_fields({"userid": value}, FIELDS)

    def test_integer_column_bounds_accepted(self):
        assert coerce_fields({"userid": 2**31 - 1}, FIELDS) == {"userid": 2**31 - 1}

    def test_bad_string(self):
        with pytest.raises(ValidationError):
            coerce_fields({"name": {"first": "a"}}, FIELDS)

    def test_none_kept(self):
        assert coerce_fields({"note": None}, FIELDS) == {"note": None}

    def test_unsupplied_fields_stay_absent(self):
        assert coerce_fields({"userid": 4}, FIELDS) == {"userid": 4}


def test_clean_rejects_missing_required():
    with pytest.raises(ValidationError):
        clean({"name": "x"}, SCHEMA, FIELDS)


def test_clean_filters_and_coerces():
    assert clean({"userid": "3", "name": "x", "junk": 1}, SCHEMA, FIELDS) == {"userid": 3, "name": "x"}


def test_clean_keeps_optional_only_when_sent():
    assert clean({"userid": 3, "name": "x"}, SCHEMA, FIELDS) == {"userid": 3, "name": "x"}
    assert clean({"userid": 3, "name": "x", "note": None}, SCHEMA, FIELDS) == {
        "userid": 3,
        "name": "x",
        "note": None,
    }

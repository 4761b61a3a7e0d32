"""Unit tests for BookValidator."""

import math

import pytest

from src.book_api.core.errors import BadRequestError, ValidationError
from src.book_api.core.validation import BookValidator
from src.book_api.entities.service.book import BookRecord
from src.book_api.runtime.config.config_data import ValidationConfig


class TestValidPayloads:
    """Payloads that satisfy the schema."""

    def test_valid_book(self, validator: BookValidator):
        """Should return a record with the exact input values."""
        book = validator.validate({"id": 1, "name": "Dune"})

        assert book == BookRecord(id=1, name="Dune")

    @pytest.mark.parametrize("book_id", [0, -7, 2**63])
    def test_any_integer_id(self, validator: BookValidator, book_id: int):
        """Should accept zero, negative and very large integers."""
        assert validator.validate({"id": book_id, "name": "x"}).id == book_id

    def test_empty_name_is_a_string(self, validator: BookValidator):
        """An empty string still satisfies the string constraint."""
        assert validator.validate({"id": 1, "name": ""}).name == ""

    def test_integral_float_coerced(self, validator: BookValidator):
        """Should coerce 3.0 to the integer 3."""
        book = validator.validate({"id": 3.0, "name": "Dune"})

        assert book.id == 3
        assert isinstance(book.id, int)

    def test_unknown_fields_ignored_by_default(self, validator: BookValidator):
        """Should drop keys the schema does not know."""
        book = validator.validate({"id": 1, "name": "Dune", "author": "Herbert"})

        assert book.model_dump() == {"id": 1, "name": "Dune"}

    def test_validation_is_idempotent(self, validator: BookValidator):
        """Validating the same input twice gives the same record."""
        payload = {"id": 5, "name": "Emma"}

        assert validator.validate(payload) == validator.validate(payload)

    def test_input_not_mutated(self, validator: BookValidator):
        """Should leave the caller's mapping untouched."""
        payload = {"id": 2.0, "name": "Emma", "extra": True}
        validator.validate(payload)

        assert payload == {"id": 2.0, "name": "Emma", "extra": True}


class TestInvalidPayloads:
    """Payloads that break the schema."""

    def test_numeric_string_id(self, validator: BookValidator):
        """A numeric-looking string is not a number."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": "1", "name": "Dune"})

        [violation] = exc_info.value.violations
        assert violation.field == "id"
        assert violation.constraint == "isNumber"
        assert violation.message == "id must be a number"

    @pytest.mark.parametrize("book_id", [True, False, [1], {"n": 1}])
    def test_non_number_id(self, validator: BookValidator, book_id):
        """Booleans and containers are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": book_id, "name": "Dune"})

        assert exc_info.value.fields == ["id"]

    @pytest.mark.parametrize("book_id", [math.nan, math.inf, -math.inf])
    def test_non_finite_id(self, validator: BookValidator, book_id: float):
        """NaN and infinities are not numbers."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": book_id, "name": "Dune"})

        assert exc_info.value.violations[0].constraint == "isNumber"

    def test_fractional_id(self, validator: BookValidator):
        """A fractional id breaks the integer constraint."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": 1.5, "name": "Dune"})

        [violation] = exc_info.value.violations
        assert violation.constraint == "isInteger"
        assert violation.message == "id must be an integer number"

    @pytest.mark.parametrize("name", [1, 1.5, None, ["Dune"], False])
    def test_non_string_name(self, validator: BookValidator, name):
        """Anything but a string fails on name."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": 1, "name": name})

        assert exc_info.value.fields == ["name"]

    def test_missing_id(self, validator: BookValidator):
        """A missing id is reported as required."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"name": "Dune"})

        [violation] = exc_info.value.violations
        assert violation.field == "id"
        assert violation.constraint == "required"

    def test_missing_name(self, validator: BookValidator):
        """A missing name is reported as required."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": 1})

        assert exc_info.value.fields == ["name"]
        assert exc_info.value.violations[0].constraint == "required"

    def test_null_value_counts_as_missing(self, validator: BookValidator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": None, "name": "Dune"})

        assert exc_info.value.violations[0].constraint == "required"

    def test_all_violations_in_schema_order(self, validator: BookValidator):
        """Every offending field is reported, id before name."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"name": 42, "id": "x"})

        assert exc_info.value.fields == ["id", "name"]

    @pytest.mark.parametrize("payload", [None, [], [1, "Dune"], "Dune", 7, {}])
    def test_non_mapping_reports_every_field(self, validator: BookValidator, payload):
        """Input without recognised fields reports id and name as missing."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate(payload)

        assert exc_info.value.fields == ["id", "name"]
        assert all(v.constraint == "required" for v in exc_info.value.violations)

    def test_validation_error_is_bad_request(self, validator: BookValidator):
        """Validation failures are client errors."""
        with pytest.raises(BadRequestError) as exc_info:
            validator.validate({})

        assert exc_info.value.status_code == 400

    def test_rejection_is_idempotent(self, validator: BookValidator):
        """The same bad input yields the same violations every time."""
        payload = {"id": "1"}
        results = []
        for _ in range(2):
            with pytest.raises(ValidationError) as exc_info:
                validator.validate(payload)
            results.append(exc_info.value.violations)

        assert results[0] == results[1]


class TestValidationOptions:
    """Behaviour controlled by ValidationConfig."""

    def test_forbid_unknown_fields(self, strict_validator: BookValidator):
        """Unknown keys become whitelist violations."""
        with pytest.raises(ValidationError) as exc_info:
            strict_validator.validate({"id": 1, "name": "Dune", "author": "Herbert"})

        [violation] = exc_info.value.violations
        assert violation.field == "author"
        assert violation.constraint == "whitelist"
        assert violation.message == "property author should not exist"

    def test_unknown_fields_reported_after_schema_fields(
        self, strict_validator: BookValidator
    ):
        with pytest.raises(ValidationError) as exc_info:
            strict_validator.validate({"b": 1, "a": 2, "id": "1"})

        assert exc_info.value.fields == ["id", "name", "b", "a"]

    def test_strict_validator_accepts_exact_payload(
        self, strict_validator: BookValidator
    ):
        assert strict_validator.validate({"id": 1, "name": "Dune"}).id == 1

    def test_stop_at_first_error(self):
        """Only the first violation is reported."""
        validator = BookValidator(ValidationConfig(stop_at_first_error=True))

        with pytest.raises(ValidationError) as exc_info:
            validator.validate({"id": "1", "name": 2})

        assert exc_info.value.fields == ["id"]

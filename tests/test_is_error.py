"""Tests for remote error detection."""

import pytest
from pydantic import ValidationError

from unit import Unit
from unit.models import UnitError, UnitResponse, is_error


class TestIsError:
    def test_error_value(self):
        err = UnitError.model_validate({"errors": [{"status": "404", "title": "Not Found"}]})
        assert is_error(err) is True

    def test_raw_error_document(self):
        assert is_error({"errors": [{"title": "Bad Request"}]}) is True

    def test_empty_errors_list(self):
        assert is_error({"errors": []}) is False

    def test_data_document(self):
        assert is_error({"data": {"id": "1", "type": "achPayment"}}) is False

    @pytest.mark.parametrize("value", [None, "errors", [], 0])
    def test_other_values(self, value):
        assert is_error(value) is False

    def test_typed_response(self):
        resp = UnitResponse[dict].model_validate({"data": {"id": "1"}})
        assert is_error(resp) is False

    def test_available_on_sdk(self):
        assert Unit.is_error({"errors": [{"status": "500"}]}) is True


class TestUnitError:
    def test_needs_an_entry(self):
        with pytest.raises(ValidationError):
            UnitError.model_validate({"errors": []})

    def test_first_entry_accessors(self):
        err = UnitError.model_validate(
            {"errors": [{"status": 422, "title": "Invalid", "detail": "amount too large"}, {"title": "other"}]}
        )
        assert err.status == "422"
        assert err.title == "Invalid"
        assert str(err) == "[422] Invalid: amount too large"

    def test_extra_fields_kept(self):
        err = UnitError.model_validate({"errors": [{"title": "x", "traceId": "abc"}]})
        assert err.errors[0].model_extra == {"traceId": "abc"}

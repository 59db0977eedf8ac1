import base64
import json

import pytest
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from core.utils.validators import (
    decode_base64_file,
    parse_json_body,
    sanitize_validation_errors,
    validate_request,
)


class SampleModel(BaseModel):
    name: str = Field(..., min_length=1)
    count: int


class TestSanitizeValidationErrors:
    def test_strips_internal_fields(self) -> None:
        with pytest.raises(PydanticValidationError) as exc_info:
            SampleModel.model_validate({"count": "abc"})

        sanitized = sanitize_validation_errors(exc_info.value.errors())

        assert {err["field"] for err in sanitized} == {"name", "count"}
        for err in sanitized:
            assert set(err) == {"field", "message"}

    def test_base64_messages_are_rewritten(self) -> None:
        errors = [{"loc": ("file",), "msg": "Value error, Invalid base64 encoded file"}]

        assert sanitize_validation_errors(errors) == [
            {"field": "file", "message": "File must be a valid Base64-encoded string"}
        ]

    def test_missing_location_defaults_to_body(self) -> None:
        assert sanitize_validation_errors([{"msg": "boom"}])[0]["field"] == "body"


class TestValidateRequest:
    def test_returns_model(self) -> None:
        model = validate_request(SampleModel, {"name": "a", "count": 2})
        assert model.count == 2

    def test_raises_pydantic_error(self) -> None:
        with pytest.raises(PydanticValidationError):
            validate_request(SampleModel, {"name": ""})


class TestParseJsonBody:
    def test_plain_body(self) -> None:
        assert parse_json_body({"body": json.dumps({"a": 1})}) == {"a": 1}

    def test_missing_body_is_empty_object(self) -> None:
        assert parse_json_body({"body": None}) == {}

    def test_base64_encoded_body(self) -> None:
        raw = base64.b64encode(json.dumps({"a": 1}).encode()).decode()
        assert parse_json_body({"body": raw, "isBase64Encoded": True}) == {"a": 1}

    def test_invalid_json(self) -> None:
        with pytest.raises(ValueError, match="Invalid JSON body"):
            parse_json_body({"body": "{not json"})

    def test_non_object_body(self) -> None:
        with pytest.raises(ValueError, match="expected an object"):
            parse_json_body({"body": "[1, 2]"})


class TestDecodeBase64File:
    def test_decodes_payload(self) -> None:
        assert decode_base64_file(base64.b64encode(b"abc").decode()) == b"abc"

    def test_accepts_data_url(self) -> None:
        value = "data:image/png;base64," + base64.b64encode(b"png").decode()
        assert decode_base64_file(value) == b"png"

    @pytest.mark.parametrize("value", ["", "   ", "invalid!!", "data:image/png;base64,"])
    def test_rejects_invalid_input(self, value: str) -> None:
        with pytest.raises(ValueError):
            decode_base64_file(value)

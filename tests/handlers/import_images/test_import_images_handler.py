import json

from handlers.import_images.handler import handler


class TestImportImagesHandler:
    def test_import_reports_counts(
        self, make_event, lambda_context, parse_body, b64, write_document, sample_record, read_document
    ) -> None:
        write_document([sample_record("img-1", description="Original")])
        document = {
            "property_images": [
                sample_record("img-1", description="Replacement"),
                sample_record("img-2"),
            ]
        }

        response = handler(
            make_event("POST", "/images/import", body={"file": b64(json.dumps(document).encode())}),
            lambda_context,
        )

        assert response["statusCode"] == 200
        body = parse_body(response)
        assert (body["imported"], body["skipped"]) == (1, 1)

        stored = {img["id"]: img for img in read_document()["property_images"]}
        assert stored["img-1"]["description"] == "Original"

    def test_invalid_structure(self, make_event, lambda_context, parse_body, b64) -> None:
        response = handler(
            make_event("POST", "/images/import", body={"file": b64(b'{"images": []}')}),
            lambda_context,
        )

        assert response["statusCode"] == 422
        assert parse_body(response)["error"] == "INVALID_IMPORT"

    def test_missing_file(self, make_event, lambda_context, parse_body) -> None:
        response = handler(make_event("POST", "/images/import", body={}), lambda_context)

        assert response["statusCode"] == 422
        assert parse_body(response)["message"] == "No JSON file uploaded"

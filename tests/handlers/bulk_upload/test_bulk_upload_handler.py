from handlers.bulk_upload.handler import handler

RESOURCE = "/images/property/{property_id}/bulk"


class TestBulkUploadHandler:
    def test_bulk_upload(self, make_event, lambda_context, parse_body, b64, sample_png_bytes, sample_jpeg_bytes) -> None:
        event = make_event(
            "POST",
            RESOURCE,
            path_params={"property_id": "P1"},
            body={
                "files": [
                    {"file": b64(sample_png_bytes), "file_name": "a.png"},
                    {"file": b64(sample_jpeg_bytes), "file_name": "b.jpg"},
                ],
                "descriptions": ["Front"],
                "types": ["exterior", "kitchen"],
            },
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 201
        body = parse_body(response)
        assert body["count"] == 2
        assert [img["order"] for img in body["images"]] == [1, 2]
        assert [img["description"] for img in body["images"]] == ["Front", ""]
        assert [img["type"] for img in body["images"]] == ["exterior", "kitchen"]

    def test_no_files(self, make_event, lambda_context, parse_body) -> None:
        event = make_event("POST", RESOURCE, path_params={"property_id": "P1"}, body={"files": []})

        response = handler(event, lambda_context)

        assert response["statusCode"] == 422
        assert parse_body(response)["message"] == "No image files uploaded"

    def test_invalid_file_in_batch_stores_nothing(
        self, make_event, lambda_context, b64, sample_png_bytes, settings
    ) -> None:
        event = make_event(
            "POST",
            RESOURCE,
            path_params={"property_id": "P1"},
            body={
                "files": [
                    {"file": b64(sample_png_bytes), "file_name": "a.png"},
                    {"file": b64(b"plain text"), "file_name": "b.png"},
                ]
            },
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 422
        assert not any(p.is_file() for p in settings.properties_upload_dir.rglob("*"))

    def test_malformed_files_entry(self, make_event, lambda_context) -> None:
        event = make_event(
            "POST", RESOURCE, path_params={"property_id": "P1"}, body={"files": [{"file_name": "a.png"}]}
        )

        assert handler(event, lambda_context)["statusCode"] == 400

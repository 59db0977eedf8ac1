from handlers.list_images.handler import handler


class TestListImagesHandler:
    def test_all_images(self, make_event, lambda_context, parse_body, write_document, sample_record) -> None:
        write_document([sample_record("img-1", "P1"), sample_record("img-2", "P2")])

        response = handler(make_event("GET", "/images"), lambda_context)

        body = parse_body(response)
        assert response["statusCode"] == 200
        assert body["count"] == 2
        assert "property_id" not in body
        assert [img["id"] for img in body["images"]] == ["img-1", "img-2"]

    def test_property_images(self, make_event, lambda_context, parse_body, write_document, sample_record) -> None:
        write_document([sample_record("img-1", "P1"), sample_record("img-2", "P2")])

        response = handler(
            make_event("GET", "/images/property/{property_id}", path_params={"property_id": "P2"}),
            lambda_context,
        )

        body = parse_body(response)
        assert body["property_id"] == "P2"
        assert [img["id"] for img in body["images"]] == ["img-2"]

    def test_invalid_property_id(self, make_event, lambda_context) -> None:
        response = handler(
            make_event("GET", "/images/property/{property_id}", path_params={"property_id": "a b"}),
            lambda_context,
        )

        assert response["statusCode"] == 400

    def test_corrupted_document(self, make_event, lambda_context, parse_body, images_file) -> None:
        images_file.parent.mkdir(parents=True, exist_ok=True)
        images_file.write_text("{", encoding="utf-8")

        response = handler(make_event("GET", "/images"), lambda_context)

        assert response["statusCode"] == 500
        body = parse_body(response)
        assert body["error"] == "DOCUMENT_INVALID_FORMAT"
        assert str(images_file) not in response["body"]

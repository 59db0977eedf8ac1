from handlers.update_image.handler import handler

RESOURCE = "/images/property/{property_id}/image/{image_id}"


class TestUpdateImageHandler:
    def test_update(self, make_event, lambda_context, parse_body, write_document, sample_record) -> None:
        write_document([sample_record("img-1", description="Old", order=1)])
        event = make_event(
            "PUT",
            RESOURCE,
            path_params={"property_id": "P1", "image_id": "img-1"},
            body={"description": "New", "order": 4, "type": "interior"},
        )

        response = handler(event, lambda_context)

        image = parse_body(response)["image"]
        assert response["statusCode"] == 200
        assert (image["description"], image["order"], image["type"]) == ("New", 4, "interior")

    def test_not_found(self, make_event, lambda_context, parse_body) -> None:
        event = make_event(
            "PUT",
            RESOURCE,
            path_params={"property_id": "P1", "image_id": "img-404"},
            body={"description": "x"},
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 404
        assert parse_body(response)["error"] == "IMAGE_NOT_FOUND"

    def test_order_must_be_integer(self, make_event, lambda_context) -> None:
        event = make_event(
            "PUT",
            RESOURCE,
            path_params={"property_id": "P1", "image_id": "img-1"},
            body={"order": "first"},
        )

        assert handler(event, lambda_context)["statusCode"] == 400

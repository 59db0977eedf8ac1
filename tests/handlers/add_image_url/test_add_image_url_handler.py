from handlers.add_image_url.handler import handler
from handlers.list_images.handler import handler as list_handler

RESOURCE = "/images/property/{property_id}/url"


class TestAddImageUrlHandler:
    def test_round_trip(self, make_event, lambda_context, parse_body) -> None:
        event = make_event(
            "POST",
            RESOURCE,
            path_params={"property_id": "P1"},
            body={"url": "http://x/a.jpg", "description": "Front"},
        )

        response = handler(event, lambda_context)

        assert response["statusCode"] == 201
        image = parse_body(response)["image"]
        assert image["thumbnailUrl"] == "http://x/a.jpg"
        assert image["order"] == 1
        assert image["type"] == "exterior"

        listing = parse_body(
            list_handler(
                make_event("GET", "/images/property/{property_id}", path_params={"property_id": "P1"}),
                lambda_context,
            )
        )
        assert listing["count"] == 1
        assert listing["images"] == [image]

    def test_missing_url(self, make_event, lambda_context, parse_body) -> None:
        event = make_event("POST", RESOURCE, path_params={"property_id": "P1"}, body={"url": "  "})

        response = handler(event, lambda_context)

        assert response["statusCode"] == 422
        assert parse_body(response)["message"] == "Image URL is required"

    def test_unknown_property_when_validation_enabled(
        self, make_event, lambda_context, monkeypatch, write_properties
    ) -> None:
        monkeypatch.setenv("VALIDATE_PROPERTY_IDS", "true")
        write_properties([{"OFFER NO": 1}])
        event = make_event(
            "POST", RESOURCE, path_params={"property_id": "P9"}, body={"url": "http://x/a.jpg"}
        )

        assert handler(event, lambda_context)["statusCode"] == 404

"""Tests for the Lambda-style entry points."""
import json

from app.handlers import make_handlers


class TestIngestHandler:
    """Test the API Gateway shaped ingest handler."""

    def test_json_string_body(self, services):
        ingest_handler, _ = make_handlers(services)
        response = ingest_handler({"body": json.dumps({"principalId": 5, "content": "hello"})}, None)

        assert response["statusCode"] == 201
        assert response["headers"] == {"Content-Type": "application/json"}
        body = json.loads(response["body"])
        assert body["event"]["principalId"] == 5
        assert body["event"]["body"] == "hello"

    def test_missing_principal_id(self, services):
        ingest_handler, _ = make_handlers(services)
        response = ingest_handler({"body": {"content": "hello"}}, None)
        assert response["statusCode"] == 400
        assert json.loads(response["body"]) == {"message": "Invalid input: principalId and content are required"}

    def test_non_ascii_content_survives(self, services):
        ingest_handler, _ = make_handlers(services)
        response = ingest_handler({"body": {"principalId": 1, "content": "Київ"}}, None)
        assert json.loads(response["body"])["event"]["body"] == "Київ"

    def test_infinity_content_is_rejected(self, services):
        ingest_handler, _ = make_handlers(services)
        response = ingest_handler({"body": '{"principalId": 1, "content": Infinity}'}, None)
        assert response["statusCode"] == 400
        assert json.loads(response["body"]) == {"message": "Invalid JSON format in request body"}


class TestForecastHandler:
    """Test the forecast handler."""

    def test_success(self, services, fake_fetcher):
        services.weather_client = fake_fetcher
        _, forecast_handler = make_handlers(services)
        response = forecast_handler({"source": "aws.events"}, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["success"] is True
        assert services.weather_store.get(body["id"])["id"] == body["id"]

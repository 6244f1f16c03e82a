"""
Tests for the FastAPI surface
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from grocery_parser.api import app, get_image_resolver, get_pipeline
from grocery_parser.config.pipeline_config import PipelineConfig
from grocery_parser.pipeline import RecipeParsingPipeline
from grocery_parser.services.image_resolver import IngredientImageResolver
from grocery_parser.services.page_fetcher import PageFetcher

from conftest import JSON_LD_PAGE, FakeLLM


def _page_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/missing":
        return httpx.Response(404)
    return httpx.Response(200, text=JSON_LD_PAGE)


@pytest.fixture
def pipeline():
    return RecipeParsingPipeline(
        fetcher=PageFetcher(transport=httpx.MockTransport(_page_handler)),
        llm_client=FakeLLM(),
        config=PipelineConfig()
    )


@pytest.fixture
def client(pipeline):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_image_resolver] = lambda: IngredientImageResolver("https://cdn.test/ingredients")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestParseRecipeEndpoint:

    def test_parse_recipe(self, client):
        response = client.post("/parse-recipe", json={"url": "https://example.com/recipes/cake"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["strategy"] == "structured_data"
        assert body["recipe"]["isParsed"] is True
        assert body["recipe"]["name"] == "Test Recipe"
        assert body["recipe"]["ingredients"][0] == {
            "name": "flour", "amount": 2.0, "unit": "cups", "category": "Pantry"
        }

    def test_invalid_url(self, client):
        response = client.post("/parse-recipe", json={"url": "not-a-url"})
        assert response.status_code == 400

    def test_fetch_failure(self, client):
        """Upstream page errors surface as 502"""
        response = client.post("/parse-recipe", json={"url": "https://example.com/missing"})
        assert response.status_code == 502
        assert "404" in response.json()["detail"]

    def test_missing_body(self, client):
        assert client.post("/parse-recipe", json={}).status_code == 422


class TestStatsAndCache:

    def test_stats_reset_and_cache(self, client, pipeline):
        client.post("/parse-recipe", json={"url": "https://example.com/recipes/cake"})
        client.post("/parse-recipe", json={"url": "https://example.com/recipes/cake"})

        stats = client.get("/stats").json()
        assert stats["totalRequests"] == 2
        assert stats["cacheHits"] == 1
        assert stats["rates"]["cacheHitRate"] == 0.5

        assert client.delete("/cache").json() == {"cleared": True}
        assert pipeline.get_cached_result("https://example.com/recipes/cake") is None

        assert client.delete("/stats").json() == {"reset": True}
        assert client.get("/stats").json()["totalRequests"] == 0


class TestMiscEndpoints:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_root_lists_endpoints(self, client):
        assert "POST /parse-recipe" in client.get("/").json()["endpoints"]

    def test_ingredient_image(self, client):
        response = client.get("/ingredient-image", params={"name": "Tomatoes"})
        assert response.status_code == 200
        assert response.json() == {
            "name": "Tomatoes",
            "slug": "tomato",
            "url": "https://cdn.test/ingredients/tomato.webp"
        }

    def test_ingredient_image_blank_name(self, client):
        assert client.get("/ingredient-image", params={"name": "  "}).status_code == 400

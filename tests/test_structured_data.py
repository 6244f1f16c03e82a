"""
Tests for JSON-LD recipe extraction and title lookup
"""

import json

from grocery_parser.parsers.structured_data import (
    extract_recipe_title,
    extract_structured_data,
    find_recipe_object,
    parse_structured_data,
)

from conftest import JSON_LD_PAGE


def _page(*blocks: str, title: str = "Some Page") -> str:
    scripts = "".join(f'<script type="application/ld+json">{block}</script>' for block in blocks)
    return f"<html><head><title>{title}</title>{scripts}</head><body><h1>Heading</h1></body></html>"


GRAPH_DATA = {
    "@context": "https://schema.org",
    "@graph": [
        {"@type": "WebPage", "name": "Graph Pie | Blog"},
        {
            "@type": "Recipe",
            "name": "Graph Pie",
            "recipeIngredient": ["2 cups flour", "1 cup sugar", "3 large eggs", "1/2 cup milk"],
        },
    ],
}


class TestFindRecipeObject:

    def test_graph_recipe(self):
        found = find_recipe_object(GRAPH_DATA)
        assert found["name"] == "Graph Pie"

    def test_type_list(self):
        data = {"@type": ["Recipe", "NewsArticle"], "name": "Listed"}
        assert find_recipe_object(data)["name"] == "Listed"

    def test_top_level_list(self):
        data = [{"@type": "Organization"}, {"@type": "Recipe", "name": "Second"}]
        assert find_recipe_object(data)["name"] == "Second"

    def test_no_recipe(self):
        assert find_recipe_object({"@type": "WebPage"}) is None
        assert find_recipe_object("Recipe") is None


class TestExtractStructuredData:

    def test_malformed_block_skipped(self):
        """A broken JSON-LD block does not hide a later valid one"""
        html = _page("{not json", json.dumps(GRAPH_DATA))
        extracted = extract_structured_data(html)
        assert extracted is not None
        assert json.loads(extracted)["@graph"][1]["name"] == "Graph Pie"

    def test_no_recipe_blocks(self):
        html = _page(json.dumps({"@type": "Organization", "name": "Example"}))
        assert extract_structured_data(html) is None
        assert extract_structured_data("") is None


class TestParseStructuredData:

    def test_parse_graph(self):
        recipe = parse_structured_data(json.dumps(GRAPH_DATA), "https://example.com/pie")
        assert recipe is not None
        assert recipe.name == "Graph Pie"
        assert recipe.is_parsed is True
        assert len(recipe.ingredients) == 4
        assert recipe.ingredients[0].name == "flour"
        assert recipe.ingredients[0].amount == 2.0
        assert recipe.ingredients[0].unit == "cups"

    def test_object_entries(self):
        data = {
            "@type": "Recipe",
            "recipeIngredient": [{"text": "2 cups flour"}, {"name": "1 cup sugar"}, "3 large eggs"],
        }
        recipe = parse_structured_data(json.dumps(data), "https://example.com")
        assert [ingredient.name for ingredient in recipe.ingredients] == ["flour", "sugar", "eggs"]

    def test_too_few_ingredients(self):
        """Too few ingredients is an expected miss, not an error"""
        data = {"@type": "Recipe", "recipeIngredient": ["2 cups flour", "1 cup sugar"]}
        assert parse_structured_data(json.dumps(data), "https://example.com") is None

    def test_invalid_json(self):
        assert parse_structured_data("not json", "https://example.com") is None


class TestRecipeTitle:

    def test_title_from_json_ld(self):
        assert extract_recipe_title(JSON_LD_PAGE) == "Test Recipe"

    def test_title_tag(self):
        html = "<html><head><title>Weeknight Cake</title></head><body><h1>Other</h1></body></html>"
        assert extract_recipe_title(html) == "Weeknight Cake"

    def test_h1_fallback(self):
        html = "<html><body><h1>Only A Heading</h1></body></html>"
        assert extract_recipe_title(html) == "Only A Heading"

    def test_no_title(self):
        assert extract_recipe_title("<html><body><p>text</p></body></html>") is None
        assert extract_recipe_title("") is None

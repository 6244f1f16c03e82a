"""
Shared fixtures: sample pages and fake collaborators for the pipeline
"""

import json
from typing import List, Optional

import logfire
import pytest

from grocery_parser.config.pipeline_config import PipelineConfig
from grocery_parser.pipeline import RecipeParsingPipeline


@pytest.fixture(scope="session", autouse=True)
def offline_logfire():
    logfire.configure(send_to_logfire=False, console=False)


class FakeFetcher:
    """Serves canned HTML and counts fetches"""

    def __init__(self, html: str = "", error: Optional[Exception] = None):
        self.html = html
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.html


class FakeLLM:
    """Returns a canned completion and records prompts"""

    def __init__(self, completion: str = "", error: Optional[Exception] = None):
        self.completion = completion
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.completion


def llm_completion(ingredients: list, recipe_name: str = "Simple Cake") -> str:
    return json.dumps({"recipeName": recipe_name, "ingredients": ingredients})


JSON_LD_PAGE = """
<html><head><title>Test Recipe | Example Kitchen</title>
<script type="application/ld+json">
{"@context": "https://schema.org", "@type": "Recipe", "name": "Test Recipe",
 "recipeIngredient": ["2 cups flour", "1 cup sugar", "3 large eggs"]}
</script></head>
<body><h1>Test Recipe</h1></body></html>
"""

QUICK_LIST_ITEMS = [
    "2 cups all-purpose flour",
    "1 cup granulated sugar",
    "3 large eggs",
    "1/2 cup milk",
    "2 tablespoons butter",
    "1 teaspoon baking powder",
    "1/2 teaspoon salt",
    "1 teaspoon vanilla extract",
    "1 cup chicken stock",
    "2 cloves garlic",
]


def list_page(items: List[str], title: str = "Weeknight Cake") -> str:
    lis = "".join(f"<li>{item}</li>" for item in items)
    return (
        f"<html><head><title>{title}</title></head><body><h1>{title}</h1>"
        f"<h2>Ingredients</h2><ul>{lis}</ul>"
        f"<h2>Instructions</h2><ol><li>Mix everything together.</li><li>Bake and enjoy.</li></ol>"
        f"</body></html>"
    )


PROSE_SECTION = "Flour, sugar, butter, eggs, milk, vanilla extract, baking powder and salt go into this cake."

PROSE_PAGE = (
    "<html><head><title>Simple Cake</title></head><body><h1>Simple Cake</h1>"
    "<h2>Ingredients</h2>"
    f"<p>{PROSE_SECTION}</p>"
    "<h2>Directions</h2><p>Mix everything and bake.</p>"
    "</body></html>"
)

CAKE_INGREDIENTS = [
    {"name": "flour", "amount": 2, "unit": "cups", "category": "Pantry"},
    {"name": "sugar", "amount": 1, "unit": "cup", "category": "Pantry"},
    {"name": "butter", "amount": 0.5, "unit": "cup", "category": "Dairy"},
    {"name": "eggs", "amount": 3, "unit": "piece", "category": "Dairy"},
    {"name": "milk", "amount": 1, "unit": "cup", "category": "Dairy"},
    {"name": "vanilla extract", "amount": 1, "unit": "teaspoon", "category": "Pantry"},
    {"name": "baking powder", "amount": 2, "unit": "teaspoons", "category": "Pantry"},
    {"name": "salt", "amount": 0.5, "unit": "teaspoon", "category": "Pantry"},
]


@pytest.fixture
def make_pipeline():
    """Build a pipeline around fake collaborators"""
    def _make(html: str = "", completion: str = "", fetch_error: Optional[Exception] = None,
              llm_error: Optional[Exception] = None, config: Optional[PipelineConfig] = None):
        fetcher = FakeFetcher(html, error=fetch_error)
        llm = FakeLLM(completion, error=llm_error)
        pipeline = RecipeParsingPipeline(fetcher=fetcher, llm_client=llm, config=config or PipelineConfig())
        return pipeline, fetcher, llm
    return _make

"""
Tests for the LLM fallback: prompt, relay client, response validation and scoring
"""

import json

import httpx
import pytest

from grocery_parser.exceptions import LLMAPIError, LLMParsingError
from grocery_parser.llm.client import LLMFallbackClient
from grocery_parser.llm.prompts import build_parsing_prompt, estimate_token_count, truncate_content
from grocery_parser.llm.response_parser import clean_completion, parse_llm_response, validate_llm_ingredient
from grocery_parser.llm.scoring import calculate_confidence, verify_against_content
from grocery_parser.models.llm_models import LLMIngredientPayload
from grocery_parser.models.recipe import TO_TASTE, GroceryCategory, Ingredient

from conftest import CAKE_INGREDIENTS, PROSE_SECTION, llm_completion

RELAY_URL = "http://relay.test/api/call-openai"


def _ingredient(name, amount=1.0, unit="", category=GroceryCategory.pantry):
    return Ingredient(name=name, amount=amount, unit=unit, category=category)


class TestPrompts:

    def test_token_estimate(self):
        assert estimate_token_count("abcde") == 2
        assert estimate_token_count("") == 0

    def test_truncate_on_line_boundary(self):
        text = "line one\nline two\nline three"
        assert truncate_content(text, max_tokens=5) == "line one\nline two"
        assert truncate_content(text, max_tokens=100) == text

    def test_prompt_contains_section(self):
        prompt = build_parsing_prompt("2 cups flour")
        assert prompt.endswith("2 cups flour")
        assert '{"recipeName":N' in prompt
        assert "Meat & Seafood" in prompt

    def test_long_section_truncated(self):
        prompt = build_parsing_prompt("x" * 10000, max_tokens=100)
        assert "x" * 400 in prompt
        assert "x" * 401 not in prompt


class TestCleanCompletion:

    def test_code_fences(self):
        content = '```json\n{"recipeName": "A", "ingredients": []}\n```'
        assert json.loads(clean_completion(content)) == {"recipeName": "A", "ingredients": []}

    def test_escaped_object(self):
        content = '{\\"recipeName\\": \\"A\\", \\"ingredients\\": []}'
        assert json.loads(clean_completion(content))["recipeName"] == "A"

    def test_bare_fractions(self):
        content = '{"ingredients": [{"name": "flour", "amount": 1 1/2, "unit": "cups"}, {"name": "salt", "amount": 1/4}]}'
        data = json.loads(clean_completion(content))
        assert data["ingredients"][0]["amount"] == 1.5
        assert data["ingredients"][1]["amount"] == 0.25

    def test_no_json(self):
        with pytest.raises(LLMParsingError):
            clean_completion("Sorry, I cannot help with that.")


class TestValidateIngredient:

    def _validate(self, **raw):
        raw.setdefault("category", "Pantry")
        return validate_llm_ingredient(LLMIngredientPayload.model_validate(raw))

    def test_string_amount(self):
        ingredient, error = self._validate(name="flour", amount="1 1/2", unit="cups")
        assert error is None
        assert ingredient.amount == 1.5
        assert ingredient.unit == "cups"

    def test_default_unit_is_piece(self):
        ingredient, _ = self._validate(name="eggs", amount=3, category="Dairy")
        assert ingredient.unit == "pieces"
        assert ingredient.category == GroceryCategory.dairy

    def test_size_qualified_unit(self):
        ingredient, error = self._validate(name="garlic", amount=3, unit="large cloves", category="Produce")
        assert error is None
        assert ingredient.unit == "large cloves"

    def test_to_taste(self):
        ingredient, _ = self._validate(name="salt", unit="to taste")
        assert ingredient.amount == 0.0
        assert ingredient.unit == TO_TASTE

    def test_category_corrected(self):
        ingredient, _ = self._validate(name="chicken stock", amount=4, unit="cups", category="Meat & Seafood")
        assert ingredient.category == GroceryCategory.pantry

    @pytest.mark.parametrize("raw", [
        {"name": "Ingredient list", "amount": 1, "unit": "piece"},
        {"name": "a", "amount": 1, "unit": "cup"},
        {"name": "flour", "amount": 0, "unit": "cups"},
        {"name": "water", "amount": 5000, "unit": "cups"},
        {"name": "basil", "amount": 2, "unit": "handfuls"},
    ])
    def test_rejected(self, raw):
        """Page furniture, zero or huge amounts and unknown units are errors"""
        ingredient, error = self._validate(**raw)
        assert ingredient is None
        assert error


class TestParseLLMResponse:

    def test_full_response(self):
        outcome = parse_llm_response(llm_completion(CAKE_INGREDIENTS), PROSE_SECTION)
        assert outcome.recipe_name == "Simple Cake"
        assert len(outcome.ingredients) == 8
        assert outcome.validation_errors == []
        assert outcome.confidence == 100
        assert outcome.verification.score == 100

    def test_item_errors_reported(self):
        completion = llm_completion([{"name": "flour", "amount": 1, "unit": "cup"}])
        outcome = parse_llm_response(completion, "1 cup flour")
        assert outcome.ingredients == []
        assert outcome.validation_errors[0].startswith("Ingredient 1:")
        assert outcome.validation_errors[-1] == "Suspiciously low ingredient count (0)"

    def test_invalid_json(self):
        with pytest.raises(LLMParsingError):
            parse_llm_response("{not valid}", "")


class TestScoring:

    def test_confidence_bonuses_and_penalties(self):
        five = [_ingredient(name) for name in ("salt", "flour", "rice", "beans", "oats")]
        assert calculate_confidence(five, ["a", "b"]) == 95
        assert calculate_confidence([], []) == 80

    def test_confidence_too_many(self):
        many = [_ingredient(f"spice {i}") for i in range(60)]
        assert calculate_confidence(many, []) == 70

    def test_confidence_clamped(self):
        assert calculate_confidence([], ["error"] * 20) == 0

    def test_verification(self):
        ingredients = [_ingredient("flour", 2.0, "cups"), _ingredient("lobster")]
        report = verify_against_content(ingredients, "2 cups flour\n1 cup sugar")
        assert report.verified == ["flour"]
        assert report.unverified == ["lobster"]
        assert report.score == 50

    def test_fuzzy_verification(self):
        report = verify_against_content([_ingredient("vanilla extract", 1.0, "teaspoon")], "Add pure vanilla extract")
        assert report.score == 100
        assert "Fuzzy match: vanilla extract" in report.notes

    def test_verification_empty(self):
        report = verify_against_content([], "anything")
        assert report.score == 0
        assert report.notes == ["No ingredients to verify"]


class TestLLMFallbackClient:

    @pytest.mark.asyncio
    async def test_success(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "content": "{}", "metrics": {"promptTokens": 10}})

        client = LLMFallbackClient(RELAY_URL, transport=httpx.MockTransport(handler))
        assert await client.complete("hi") == "{}"
        assert seen == [{"prompt": "hi"}]

    @pytest.mark.asyncio
    async def test_error_status(self):
        client = LLMFallbackClient(RELAY_URL, transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")))
        with pytest.raises(LLMAPIError) as exc_info:
            await client.complete("hi")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_bad_envelope(self):
        client = LLMFallbackClient(RELAY_URL, transport=httpx.MockTransport(lambda request: httpx.Response(200, text="not json")))
        with pytest.raises(LLMParsingError):
            await client.complete("hi")

    @pytest.mark.asyncio
    async def test_relay_reports_failure(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"success": False, "error": "quota exceeded"}))
        client = LLMFallbackClient(RELAY_URL, transport=transport)
        with pytest.raises(LLMParsingError, match="quota exceeded"):
            await client.complete("hi")

    @pytest.mark.asyncio
    async def test_unreachable_and_timeout(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        def stall(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(LLMAPIError) as exc_info:
            await LLMFallbackClient(RELAY_URL, transport=httpx.MockTransport(refuse)).complete("hi")
        assert exc_info.value.status_code == 503

        with pytest.raises(LLMAPIError) as exc_info:
            await LLMFallbackClient(RELAY_URL, transport=httpx.MockTransport(stall)).complete("hi")
        assert exc_info.value.status_code == 504

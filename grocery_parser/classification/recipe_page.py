"""
Recipe page gate.

A RecipePageClassifier runs an ordered list of signals over the URL and the
page HTML. Each signal either votes (accept or reject) or abstains; the first
vote decides. When every signal abstains the configured default applies.
The decision carries the rationale collected along the way so that a
rejected page can be explained in logs.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

RECIPE_DOMAIN_ALLOW_LIST = frozenset({
    "allrecipes.com", "bonappetit.com", "seriouseats.com", "foodnetwork.com",
    "epicurious.com", "foodandwine.com", "thekitchn.com", "bbcgoodfood.com",
    "cooking.nytimes.com", "simplyrecipes.com", "smittenkitchen.com",
    "delish.com", "loveandlemons.com", "taste.com.au", "nytimes.com",
})

NON_RECIPE_DOMAIN_DENY_LIST = frozenset({
    "espn.com", "cnn.com", "bbc.com", "bloomberg.com",
    "wsj.com", "foxnews.com", "theverge.com", "techcrunch.com",
})

NEGATIVE_TOKENS = (
    "scoreboard", "subscribe", "live updates", "highlights", "analysis",
    "breaking news", "video player",
)


@dataclass
class SignalResult:
    """Outcome of one signal: verdict None means the signal abstains"""
    signal: str
    verdict: Optional[bool]
    reason: str


@dataclass
class GateDecision:
    is_recipe: bool
    deciding_signal: Optional[str]
    rationale: List[str] = field(default_factory=list)


def _bare_host(url: str) -> str:
    host = (urlparse(url).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


class DomainReputationSignal:
    """Deny-listed domains are rejected outright; the allow list is advisory only"""
    name = "domain_reputation"

    def __init__(self, deny_list: Sequence[str] = NON_RECIPE_DOMAIN_DENY_LIST,
                 allow_list: Sequence[str] = RECIPE_DOMAIN_ALLOW_LIST):
        self.deny_list = frozenset(deny_list)
        self.allow_list = frozenset(allow_list)

    def evaluate(self, url: str, html: str) -> SignalResult:
        host = _bare_host(url)
        if host in self.deny_list:
            return SignalResult(self.name, False, f"{host} is a known non-recipe domain")
        if host in self.allow_list:
            return SignalResult(self.name, None, f"{host} is a known recipe domain (advisory)")
        return SignalResult(self.name, None, f"{host or 'unknown host'} has no domain reputation")


class SchemaPresenceSignal:
    name = "schema_presence"

    SCHEMA_PATTERN = re.compile(r'"@type"\s*:\s*(?:\[[^\]]*)?"recipe"', re.IGNORECASE)

    def evaluate(self, url: str, html: str) -> SignalResult:
        lower = html.lower()
        if self.SCHEMA_PATTERN.search(lower) or 'itemtype="http://schema.org/recipe"' in lower \
                or 'itemtype="https://schema.org/recipe"' in lower:
            return SignalResult(self.name, True, "page declares a schema.org Recipe")
        return SignalResult(self.name, None, "no Recipe schema")


class KeywordMarkersSignal:
    """Ingredient markers together with instruction markers or cook-time metadata"""
    name = "keyword_markers"

    def evaluate(self, url: str, html: str) -> SignalResult:
        lower = html.lower()
        ingredients = ">ingredients<" in lower or "ingredients:" in lower or "ingredient list" in lower
        instructions = ">instructions<" in lower or ">directions<" in lower or "directions:" in lower or "method:" in lower
        cook_meta = any(token in lower for token in ("prep time", "cook time", "total time", "servings"))
        if ingredients and instructions:
            return SignalResult(self.name, True, "ingredient and instruction markers present")
        if ingredients and cook_meta:
            return SignalResult(self.name, True, "ingredient markers with cook-time metadata")
        return SignalResult(self.name, None, "recipe keyword markers incomplete")


class IngredientListNearHeadingSignal:
    name = "ingredient_list_near_heading"

    ITEM_PATTERN = re.compile(r"<li[^>]*>.*?</li>", re.DOTALL)
    HEADING_WINDOW = 1200
    LIST_WINDOW = 5000

    def evaluate(self, url: str, html: str) -> SignalResult:
        lower = html.lower()
        for heading in re.finditer("ingredients", lower):
            first_item = lower.find("<li", heading.end(), heading.end() + self.HEADING_WINDOW)
            if first_item < 0:
                continue
            items = self.ITEM_PATTERN.findall(lower, first_item, first_item + self.LIST_WINDOW)
            if len(items) >= 3:
                return SignalResult(self.name, True, "three or more list items follow an ingredients heading")
        return SignalResult(self.name, None, "no list near an ingredients heading")


class NegativeTokensSignal:
    """News, sports and video page vocabulary"""
    name = "negative_tokens"

    def __init__(self, tokens: Sequence[str] = NEGATIVE_TOKENS):
        self.tokens = tuple(tokens)

    def evaluate(self, url: str, html: str) -> SignalResult:
        lower = html.lower()
        found = [token for token in self.tokens if token in lower]
        if found:
            return SignalResult(self.name, False, f"non-recipe vocabulary: {', '.join(found)}")
        return SignalResult(self.name, None, "no non-recipe vocabulary")


def default_signals() -> list:
    return [
        DomainReputationSignal(),
        SchemaPresenceSignal(),
        KeywordMarkersSignal(),
        IngredientListNearHeadingSignal(),
        NegativeTokensSignal(),
    ]


class RecipePageClassifier:
    """Decides whether a fetched page is worth parsing as a recipe"""

    def __init__(self, signals: Optional[list] = None, default_accept: bool = False):
        self.signals = signals if signals is not None else default_signals()
        self.default_accept = default_accept

    def classify(self, url: str, html: str) -> GateDecision:
        rationale = []
        for signal in self.signals:
            result = signal.evaluate(url, html or "")
            rationale.append(f"{result.signal}: {result.reason}")
            if result.verdict is not None:
                logger.debug(f"{result.signal} decided is_recipe={result.verdict} for {url}")
                return GateDecision(is_recipe=result.verdict, deciding_signal=result.signal, rationale=rationale)

        rationale.append("no signal decided; using default")
        return GateDecision(is_recipe=self.default_accept, deciding_signal=None, rationale=rationale)

    def is_likely_recipe(self, url: str, html: str) -> bool:
        return self.classify(url, html).is_recipe

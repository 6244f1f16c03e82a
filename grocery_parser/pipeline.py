"""
Recipe parsing pipeline.

Strategies run from cheapest to most expensive and the first one with
enough coverage wins:

    cache -> fetch -> recipe page gate -> structured data -> quick line parse
      -> regex section parse -> LLM fallback -> confidence/verification gate

Only the page fetch and the LLM call are awaited; every parsing stage is a
plain synchronous function. Shared state (result cache and counters) lives
in a PipelineContext owned by the caller.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

import logfire

from .classification.recipe_page import RecipePageClassifier
from .config.pipeline_config import PipelineConfig, TimeoutConfig, get_config
from .config.settings import Settings, get_settings
from .exceptions import (
    GroceryParserError,
    LLMAPIError,
    LLMParsingError,
    LowConfidenceError,
    LowVerificationError
)
from .llm.client import LLMFallbackClient
from .llm.prompts import build_parsing_prompt
from .llm.response_parser import LLMParseOutcome, parse_llm_response
from .models.recipe import Ingredient, Recipe, RecipeParsingResult
from .monitoring.performance_stats import PerformanceStats, StatsSnapshot
from .monitoring.result_cache import ResultCache
from .parsers.html_list_extractor import extract_ingredient_list_items
from .parsers.sanitizer import sanitize_ingredients
from .parsers.section_parser import (
    extract_ingredient_section,
    has_sub_sections,
    measured_count,
    merge_ingredients,
    parse_ingredients_with_regex,
    parse_lines,
    quick_candidate_lines
)
from .parsers.structured_data import extract_recipe_title, extract_structured_data, parse_structured_data
from .services.page_fetcher import PageFetcher

logger = logging.getLogger(__name__)

SLOW_PARSE_SECONDS = 5.0

STRATEGY_GATE = "recipe_gate"
STRATEGY_STRUCTURED = "structured_data"
STRATEGY_QUICK = "quick_parse"
STRATEGY_REGEX = "regex_parse"
STRATEGY_DETERMINISTIC_FALLBACK = "deterministic_fallback"
STRATEGY_LLM = "llm"

NOT_A_RECIPE_MESSAGE = "Page does not look like a recipe"


@dataclass
class PipelineContext:
    """Shared mutable state of a pipeline: result cache and outcome counters"""
    cache: ResultCache = field(default_factory=ResultCache)
    stats: PerformanceStats = field(default_factory=PerformanceStats)

    @classmethod
    def from_config(cls, config: PipelineConfig) -> 'PipelineContext':
        return cls(
            cache=ResultCache(capacity=config.cache_capacity, evict_batch=config.cache_evict_batch),
            stats=PerformanceStats()
        )


class RecipeParsingPipeline:
    """
    Turns a recipe URL into a grocery ingredient list.

    fetcher and llm_client only need fetch(url) and complete(prompt)
    coroutines, so tests can pass simple fakes.
    """

    def __init__(self, fetcher, llm_client, config: Optional[PipelineConfig] = None,
                 context: Optional[PipelineContext] = None,
                 classifier: Optional[RecipePageClassifier] = None):
        self.fetcher = fetcher
        self.llm_client = llm_client
        self.config = config or PipelineConfig()
        self.context = context or PipelineContext.from_config(self.config)
        self.classifier = classifier or RecipePageClassifier(default_accept=self.config.gate_default_accept)

    # Cache and stats surface

    def get_cached_result(self, url: str) -> Optional[RecipeParsingResult]:
        return self.context.cache.get(url)

    def cache_result(self, result: RecipeParsingResult, url: str):
        self.context.cache.put(url, result)

    def clear_cache(self):
        self.context.cache.clear()

    def get_performance_stats(self) -> StatsSnapshot:
        return self.context.stats.snapshot()

    def reset_performance_stats(self):
        self.context.stats.reset()

    # Parsing

    async def parse_recipe(self, url: str) -> RecipeParsingResult:
        """
        Parse a recipe page into a grocery ingredient list.

        Args:
            url: Recipe page URL

        Returns:
            RecipeParsingResult; confidence, verification and gate rejections
            come back as success=False with a readable error

        Raises:
            InvalidURLError: URL is malformed
            FetchError: Page could not be fetched
            LLMAPIError, LLMParsingError: LLM fallback failed and no
                deterministic ingredients were available
        """
        start = time.time()

        cached = self.get_cached_result(url)
        if cached is not None:
            self.context.stats.record_cache_hit()
            logger.info(f"Cache hit for {url}")
            return cached

        try:
            html = await self.fetcher.fetch(url)
        except GroceryParserError:
            self.context.stats.record_failure()
            raise

        if self.config.gate_enabled:
            decision = self.classifier.classify(url, html)
            if not decision.is_recipe:
                logger.info(f"Recipe gate rejected {url}: {decision.rationale[-1]}")
                result = RecipeParsingResult(
                    recipe=Recipe(url=url), success=False,
                    error=NOT_A_RECIPE_MESSAGE, strategy=STRATEGY_GATE
                )
                self.context.stats.record_failure()
                return self._finish(url, result, start)

        structured = self._try_structured_data(url, html)
        if structured is not None:
            self.context.stats.record_structured_data_success()
            return self._finish(url, structured, start)

        section = extract_ingredient_section(html)
        list_items = extract_ingredient_list_items(html)
        if list_items:
            section = "\n".join(list_items)

        quick_result, deterministic = self._try_quick_and_regex(url, html, section, list_items)
        if quick_result is not None:
            self.context.stats.record_regex_success()
            return self._finish(url, quick_result, start)

        return await self._llm_fallback(url, html, section, deterministic, start)

    def _try_structured_data(self, url: str, html: str) -> Optional[RecipeParsingResult]:
        json_text = extract_structured_data(html)
        if not json_text:
            return None
        recipe = parse_structured_data(json_text, url, min_ingredients=self.config.structured_min_ingredients)
        if recipe is None:
            return None
        recipe.ingredients = sanitize_ingredients(recipe.ingredients)
        recipe.name = recipe.name or extract_recipe_title(html)
        logger.info(f"Structured data yielded {len(recipe.ingredients)} ingredients for {url}")
        return RecipeParsingResult(recipe=recipe, success=True, strategy=STRATEGY_STRUCTURED)

    def _try_quick_and_regex(self, url: str, html: str, section: str,
                             list_items: List[str]) -> Tuple[Optional[RecipeParsingResult], List[Ingredient]]:
        """
        Deterministic text strategies.

        Returns (result, deterministic) where result is set when a strategy
        had enough coverage, and deterministic holds the best partial set for
        the LLM error fallback.
        """
        config = self.config
        quick = parse_lines(list_items or quick_candidate_lines(section))
        required = config.quick_min_items_multi_section if has_sub_sections(section) else config.quick_min_items

        if len(quick) >= required:
            logger.info(f"Quick parse found {len(quick)} ingredients for {url}")
            return self._deterministic_result(url, html, quick, STRATEGY_QUICK), quick

        regex = parse_ingredients_with_regex(section)

        if 0 < len(quick) <= config.small_recipe_max_items:
            merged = merge_ingredients(quick, regex)
            logger.info(f"Small recipe: {len(quick)} quick items merged to {len(merged)} for {url}")
            return self._deterministic_result(url, html, merged, STRATEGY_QUICK), merged

        deterministic = quick
        if regex:
            measured = measured_count(regex)
            needed = max(config.regex_min_measured_items, int(len(regex) * config.regex_min_measured_ratio))
            if len(regex) >= config.regex_min_items and measured >= needed:
                logger.info(f"Regex parse found {len(regex)} ingredients for {url}")
                return self._deterministic_result(url, html, regex, STRATEGY_REGEX), regex
            logger.info(f"Regex parse found only {len(regex)} ingredients ({measured} measured) for {url}")
            deterministic = regex

        return None, deterministic

    def _deterministic_result(self, url: str, html: str, ingredients: List[Ingredient],
                              strategy: str) -> RecipeParsingResult:
        recipe = Recipe(
            url=url,
            name=extract_recipe_title(html),
            ingredients=sanitize_ingredients(ingredients),
            is_parsed=True
        )
        return RecipeParsingResult(recipe=recipe, success=True, strategy=strategy)

    async def _llm_fallback(self, url: str, html: str, section: str,
                            deterministic: List[Ingredient], start: float) -> RecipeParsingResult:
        prompt = build_parsing_prompt(
            section,
            max_tokens=self.config.max_prompt_tokens,
            chars_per_token=self.config.chars_per_token
        )
        try:
            completion = await self.llm_client.complete(prompt)
            outcome = parse_llm_response(completion, section)
        except (LLMAPIError, LLMParsingError) as e:
            if not deterministic:
                self.context.stats.record_failure()
                logfire.error("llm_fallback_failed", url=url, error=str(e))
                raise
            logfire.warn("llm_fallback_suppressed", url=url, error=str(e),
                         deterministic_count=len(deterministic))
            result = self._deterministic_result(url, html, deterministic, STRATEGY_DETERMINISTIC_FALLBACK)
            self.context.stats.record_regex_success()
            return self._finish(url, result, start)

        result = self._gate_llm_outcome(url, html, outcome)
        if result.success:
            self.context.stats.record_llm_success()
        else:
            self.context.stats.record_failure()
        return self._finish(url, result, start)

    def _gate_llm_outcome(self, url: str, html: str, outcome: LLMParseOutcome) -> RecipeParsingResult:
        """Apply the confidence and verification thresholds to an LLM parse"""
        recipe = Recipe(
            url=url,
            name=outcome.recipe_name or extract_recipe_title(html),
            ingredients=outcome.ingredients,
            is_parsed=bool(outcome.ingredients)
        )
        confidence = outcome.confidence
        verification = outcome.verification.score

        error = None
        if confidence < self.config.min_confidence:
            error = str(LowConfidenceError(confidence))
        elif verification < self.config.min_verification:
            error = str(LowVerificationError(verification))

        if error:
            logfire.warn("llm_result_rejected", url=url, confidence=confidence,
                         verification=verification, unverified=outcome.verification.unverified[:10])
            return RecipeParsingResult(recipe=recipe, success=False, error=error, strategy=STRATEGY_LLM)

        if verification < self.config.verification_warning_below:
            logger.warning(
                f"Verification score {verification}% for {url}; "
                f"unverified: {', '.join(outcome.verification.unverified[:5])}"
            )
        return RecipeParsingResult(recipe=recipe, success=True, strategy=STRATEGY_LLM)

    def _finish(self, url: str, result: RecipeParsingResult, start: float) -> RecipeParsingResult:
        self.cache_result(result, url)
        total_time = time.time() - start
        logfire.info("recipe_parse_completed",
                     url=url,
                     strategy=result.strategy,
                     success=result.success,
                     ingredient_count=len(result.recipe.ingredients),
                     total_time=total_time)
        if total_time > SLOW_PARSE_SECONDS:
            logfire.warn("slow_recipe_parse", url=url, total_time=total_time, strategy=result.strategy)
        return result


def build_pipeline(settings: Optional[Settings] = None, config: Optional[PipelineConfig] = None,
                   context: Optional[PipelineContext] = None) -> RecipeParsingPipeline:
    """Wire a pipeline from settings: page fetcher, relay client, thresholds and gate"""
    settings = settings or get_settings()
    config = config or get_config()
    timeouts = TimeoutConfig.from_settings(settings)
    config = replace(config, timeouts=timeouts, gate_enabled=config.gate_enabled and settings.recipe_gate_enabled)

    return RecipeParsingPipeline(
        fetcher=PageFetcher(timeout=timeouts.fetch_timeout(), user_agent=settings.user_agent),
        llm_client=LLMFallbackClient(settings.llm_relay_url, timeout=timeouts.llm_timeout()),
        config=config,
        context=context
    )

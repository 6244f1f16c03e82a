"""
Pipeline Configuration for the Recipe Ingredient Pipeline

Centralizes the empirically tuned thresholds and network timeouts so they can
be overridden per deployment instead of living at call sites.
"""

from typing import List, Optional
from dataclasses import dataclass, field, asdict
import json
import os

import httpx

from .settings import Settings


@dataclass
class TimeoutConfig:
    """Network timeouts passed into fetch and LLM operations"""
    fetch_seconds: float = 15.0
    connect_seconds: float = 5.0
    llm_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> 'TimeoutConfig':
        return cls(
            fetch_seconds=settings.fetch_timeout_seconds,
            connect_seconds=settings.connect_timeout_seconds,
            llm_seconds=settings.llm_timeout_seconds
        )

    def fetch_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.fetch_seconds, connect=self.connect_seconds)

    def llm_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.llm_seconds, connect=self.connect_seconds)


@dataclass
class PipelineConfig:
    """Thresholds that decide when each extraction strategy is good enough"""

    # Structured data (JSON-LD)
    structured_min_ingredients: int = 3

    # Quick line parse
    quick_min_items: int = 10
    quick_min_items_multi_section: int = 12
    small_recipe_max_items: int = 12

    # Regex section parse
    regex_min_items: int = 12
    regex_min_measured_ratio: float = 0.5
    regex_min_measured_items: int = 3

    # LLM fallback
    max_prompt_tokens: int = 1600
    chars_per_token: int = 4
    min_confidence: int = 70
    min_verification: int = 30
    verification_warning_below: int = 80

    # Result cache
    cache_capacity: int = 50
    cache_evict_batch: int = 10

    # Recipe page gate
    gate_enabled: bool = True
    gate_default_accept: bool = False  # Unsure pages are rejected

    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return asdict(self)

    @classmethod
    def from_env(cls) -> 'PipelineConfig':
        """Load configuration from environment variables"""
        config = cls()

        int_overrides = {
            "PARSER_QUICK_MIN_ITEMS": "quick_min_items",
            "PARSER_QUICK_MIN_ITEMS_MULTI_SECTION": "quick_min_items_multi_section",
            "PARSER_REGEX_MIN_ITEMS": "regex_min_items",
            "PARSER_MAX_PROMPT_TOKENS": "max_prompt_tokens",
            "PARSER_MIN_CONFIDENCE": "min_confidence",
            "PARSER_MIN_VERIFICATION": "min_verification",
            "PARSER_CACHE_CAPACITY": "cache_capacity",
        }
        for env_name, attr in int_overrides.items():
            if os.getenv(env_name):
                setattr(config, attr, int(os.getenv(env_name)))

        if os.getenv("PARSER_REGEX_MIN_MEASURED_RATIO"):
            config.regex_min_measured_ratio = float(os.getenv("PARSER_REGEX_MIN_MEASURED_RATIO"))
        if os.getenv("PARSER_GATE_ENABLED"):
            config.gate_enabled = os.getenv("PARSER_GATE_ENABLED").lower() == "true"

        return config

    @classmethod
    def from_file(cls, filepath: str) -> 'PipelineConfig':
        """Load configuration from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)

        config = cls()
        for key, value in data.items():
            if key == "timeouts" and isinstance(value, dict):
                config.timeouts = TimeoutConfig(**value)
            elif hasattr(config, key):
                setattr(config, key, value)

        return config

    def validate(self) -> List[str]:
        """Validate configuration and return any errors"""
        errors = []

        if self.structured_min_ingredients < 1:
            errors.append("structured_min_ingredients must be at least 1")
        if self.quick_min_items < 1 or self.quick_min_items_multi_section < 1:
            errors.append("quick parse thresholds must be at least 1")
        if not 0 <= self.regex_min_measured_ratio <= 1:
            errors.append("regex_min_measured_ratio must be between 0 and 1")
        if not 0 <= self.min_confidence <= 100:
            errors.append("min_confidence must be between 0 and 100")
        if not 0 <= self.min_verification <= self.verification_warning_below <= 100:
            errors.append("verification thresholds must satisfy 0 <= min <= warning <= 100")
        if self.cache_capacity < 1:
            errors.append("cache_capacity must be at least 1")
        if not 1 <= self.cache_evict_batch <= self.cache_capacity:
            errors.append("cache_evict_batch must be between 1 and cache_capacity")
        if self.max_prompt_tokens < 1 or self.chars_per_token < 1:
            errors.append("token budget values must be at least 1")
        if min(self.timeouts.fetch_seconds, self.timeouts.connect_seconds, self.timeouts.llm_seconds) <= 0:
            errors.append("timeouts must be positive")

        return errors


# Singleton instance
_config_instance: Optional[PipelineConfig] = None


def get_config() -> PipelineConfig:
    """Get or create the configuration singleton"""
    global _config_instance

    if _config_instance is None:
        # Try loading from file first, then env, then defaults
        config_path = os.getenv("PARSER_CONFIG_PATH")
        if config_path and os.path.exists(config_path):
            _config_instance = PipelineConfig.from_file(config_path)
        else:
            _config_instance = PipelineConfig.from_env()

        errors = _config_instance.validate()
        if errors:
            _config_instance = None
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return _config_instance

"""
Ingredient image lookup.

Images are stored as {base_url}/{slug}.webp where the slug is the singular,
hyphenated base ingredient ("Chopped Shallots" -> "shallot"). Regional and
variant names map to one slug through the alias table, which can be extended
from a JSON file.
"""

import asyncio
import json
import logging
import re
from typing import Dict, Iterable, List, Optional, Set

import httpx

logger = logging.getLogger(__name__)

SLUG_ALIASES = {
    "scallion": "green-onion",
    "scallions": "green-onion",
    "green onions": "green-onion",
    "spring onions": "green-onion",
    "coriander": "cilantro",
    "coriander leaves": "cilantro",
    "cilantro leaves": "cilantro",
    "tarragon sprigs": "tarragon",
    "capsicum": "bell-pepper",
    "aubergine": "eggplant",
    "courgette": "zucchini",
    "powdered sugar": "confectioners-sugar",
    "confectioners sugar": "confectioners-sugar",
    "caster sugar": "superfine-sugar",
    "chick peas": "chickpea",
    "garbanzo beans": "chickpea",
    "bell peppers": "bell-pepper",
    "red bell peppers": "red-bell-pepper",
    "tomatoes": "tomato",
    "shallots": "shallot",
    "avocados": "avocado",
    "onions": "onion",
    "peppers": "pepper",
}

SLUG_DESCRIPTORS = {
    "fresh", "dried", "ripe", "unripe", "organic", "large", "small", "medium",
    "sliced", "diced", "chopped", "minced", "grated", "peeled", "seeded",
    "thin", "thick", "whole", "raw", "frozen",
    "sprig", "sprigs", "bunch", "bunches", "clove", "cloves",
    "leaf", "leaves", "stalk", "stalks", "stem", "stems",
}

UNCHANGED_PLURALS = {"molasses", "grits", "swiss", "brussels"}


def singularize(word: str) -> str:
    if word in UNCHANGED_PLURALS:
        return word
    if word.endswith("ies") and len(word) > 4:
        return word[:-3] + "y"
    if word.endswith("oes"):
        return word[:-2]
    if word.endswith(("ches", "shes", "xes", "sses")):
        return word[:-2]
    if word.endswith(("us", "ss")):
        return word
    if word.endswith("s") and len(word) > 3:
        return word[:-1]
    return word


class IngredientImageResolver:
    """Maps ingredient names to image URLs and optionally warms them up"""

    def __init__(self, base_url: str, aliases: Optional[Dict[str, str]] = None,
                 max_concurrent: int = 6, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.aliases = dict(SLUG_ALIASES)
        if aliases:
            self.aliases.update({key.lower(): value for key, value in aliases.items()})
        self.max_concurrent = max_concurrent
        self.transport = transport
        self.prefetched: Set[str] = set()

    def load_aliases(self, filepath: str) -> int:
        """Merge a JSON {"name": "slug"} file into the alias map; returns the number of entries"""
        with open(filepath, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Alias file {filepath} must contain a JSON object")
        self.aliases.update({str(key).lower(): str(value) for key, value in data.items()})
        logger.info(f"Loaded {len(data)} ingredient image aliases from {filepath}")
        return len(data)

    def slug(self, name: str) -> str:
        """Image slug for an ingredient name"""
        phrase = re.sub(r"\([^)]*\)", " ", (name or "").lower())
        phrase = re.sub(r"[^a-z\s-]", " ", phrase)
        phrase = re.sub(r"\s+", " ", phrase).strip()
        if phrase in self.aliases:
            return self.aliases[phrase]

        words = [word for word in phrase.replace("-", " ").split() if word not in SLUG_DESCRIPTORS]
        if not words:
            words = phrase.split() or ["ingredient"]
        stripped = " ".join(words)
        if stripped in self.aliases:
            return self.aliases[stripped]

        words[-1] = singularize(words[-1])
        singular = " ".join(words)
        if singular in self.aliases:
            return self.aliases[singular]
        return "-".join(words)

    def resolve(self, name: str) -> str:
        return f"{self.base_url}/{self.slug(name)}.webp"

    async def prefetch(self, names: Iterable[str]) -> List[str]:
        """
        Request each distinct image once so the CDN has it warm.

        Returns:
            Slugs that answered 200 during this call
        """
        slugs = []
        for name in names:
            slug = self.slug(name)
            if slug not in self.prefetched and slug not in slugs:
                slugs.append(slug)
        if not slugs:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def _warm(client: httpx.AsyncClient, slug: str) -> Optional[str]:
            async with semaphore:
                try:
                    response = await client.get(f"{self.base_url}/{slug}.webp")
                except httpx.HTTPError as e:
                    logger.debug(f"Image prefetch failed for {slug}: {e}")
                    return None
                if response.status_code != 200:
                    logger.debug(f"Image prefetch for {slug} returned HTTP {response.status_code}")
                    return None
                return slug

        async with httpx.AsyncClient(timeout=10.0, transport=self.transport) as client:
            results = await asyncio.gather(*(_warm(client, slug) for slug in slugs))

        warmed = [slug for slug in results if slug]
        self.prefetched.update(warmed)
        logger.info(f"Prefetched {len(warmed)}/{len(slugs)} ingredient images")
        return warmed

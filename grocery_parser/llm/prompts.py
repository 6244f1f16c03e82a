"""
Prompt templates for the LLM ingredient fallback.
"""

import logging

logger = logging.getLogger(__name__)

CATEGORY_CHOICES = "Produce, Meat & Seafood, Deli, Bakery, Frozen, Pantry, Dairy, Beverages"

PARSING_PROMPT_TEMPLATE = """Respond ONLY with a JSON object. Do not include markdown, explanation, or formatting.

Parse ingredients into {{"recipeName":N,"ingredients":[{{"name":X,"amount":Y,"unit":Z,"category":C}}]}}

Rules:
1. name: Remove prep words, keep essential descriptors
2. amount: Convert ALL fractions to decimals (default to 1 if no amount)
3. unit: Standardize to full words (default to "piece" if no unit)
4. category: Must be one of [{categories}]
5. Only list ingredients that appear in the text. Never invent ingredients.

Examples:
"2 1/2 tbsp finely chopped fresh basil" → {{"name":"basil","amount":2.5,"unit":"tablespoons","category":"Produce"}}
"1 (14.5 oz) can diced tomatoes, drained" → {{"name":"tomatoes","amount":14.5,"unit":"ounces","category":"Pantry"}}
"3 large cloves garlic, minced" → {{"name":"garlic","amount":3,"unit":"large cloves","category":"Produce"}}
"1 lb medium shrimp (31-40 count), peeled and deveined" → {{"name":"shrimp","amount":1,"unit":"pound","category":"Meat & Seafood"}}
"crispy shallots" → {{"name":"crispy shallots","amount":1,"unit":"piece","category":"Produce"}}
"1/2 cup dry white wine" → {{"name":"white wine","amount":0.5,"unit":"cup","category":"Beverages"}}
"1/4 cup fresh lemon juice" → {{"name":"lemon juice","amount":0.25,"unit":"cup","category":"Produce"}}

Parse these ingredients:
{content}"""


def estimate_token_count(text: str, chars_per_token: int = 4) -> int:
    """Rough token estimate: one token per chars_per_token characters"""
    return -(-len(text or "") // chars_per_token)


def truncate_content(text: str, max_tokens: int, chars_per_token: int = 4) -> str:
    """Cut text to the token budget, preferring to end on a full line"""
    limit = max_tokens * chars_per_token
    if len(text) <= limit:
        return text
    truncated = text[:limit]
    last_newline = truncated.rfind("\n")
    if last_newline > limit // 2:
        truncated = truncated[:last_newline]
    return truncated


def build_parsing_prompt(section: str, max_tokens: int = 1600, chars_per_token: int = 4) -> str:
    """
    Build the ingredient parsing prompt for a page section.

    Args:
        section: Ingredient section text (plain text, not HTML)
        max_tokens: Token budget for the section itself
        chars_per_token: Characters per estimated token

    Returns:
        Prompt ready to send to the completion relay
    """
    content = (section or "").strip()
    tokens = estimate_token_count(content, chars_per_token)
    if tokens > max_tokens:
        logger.info(f"Ingredient section is ~{tokens} tokens, truncating to {max_tokens}")
        content = truncate_content(content, max_tokens, chars_per_token)

    return PARSING_PROMPT_TEMPLATE.format(categories=CATEGORY_CHOICES, content=content)

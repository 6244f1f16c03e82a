"""
HTML list extraction: finds the <ul>/<ol> that holds the ingredient list.

A list qualifies when the text just before it, or its own or an ancestor's
class/id, mentions "ingredient". Among qualifying lists that also look like
measured ingredients, the largest one wins.
"""

import logging
import re
from typing import List

from bs4 import BeautifulSoup, Comment, Tag

from ..core.line_classifier import has_leading_count, has_measurement

logger = logging.getLogger(__name__)

CONTEXT_WINDOW_CHARS = 1500
SKIPPED_PARENTS = {"script", "style", "noscript", "head", "template"}


def _preceding_text(list_tag: Tag, limit: int = CONTEXT_WINDOW_CHARS) -> str:
    collected = []
    total = 0
    for text in list_tag.find_all_previous(string=True):
        if isinstance(text, Comment) or (text.parent is not None and text.parent.name in SKIPPED_PARENTS):
            continue
        collected.append(str(text))
        total += len(text)
        if total >= limit:
            break
    return " ".join(reversed(collected))[-limit:]


def _attribute_mentions_ingredient(tag: Tag) -> bool:
    node = tag
    while node is not None and isinstance(node, Tag):
        classes = node.get("class") or []
        if isinstance(classes, str):
            classes = [classes]
        markers = " ".join(classes) + " " + (node.get("id") or "")
        if "ingredient" in markers.lower():
            return True
        node = node.parent
    return False


def _is_ingredient_context(list_tag: Tag) -> bool:
    if _attribute_mentions_ingredient(list_tag):
        return True
    return "ingredient" in _preceding_text(list_tag).lower()


def _item_text(item: Tag) -> str:
    return re.sub(r"\s+", " ", item.get_text(" ", strip=True)).strip()


def _is_measured(text: str) -> bool:
    return has_measurement(text) or has_leading_count(text)


def is_acceptable_list(items: List[str]) -> bool:
    """Short lists must be fully measured; longer ones at least half measured"""
    if not items:
        return False
    measured = sum(1 for item in items if _is_measured(item))
    if len(items) <= 3 and measured == len(items):
        return True
    return measured >= max(3, int(len(items) * 0.5))


def extract_ingredient_list_items(html: str) -> List[str]:
    """
    Return the markup-stripped items of the best ingredient list on a page.

    Args:
        html: Raw page HTML

    Returns:
        Item texts of the largest accepted list, or an empty list
    """
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    best: List[str] = []

    for list_tag in soup.find_all(["ul", "ol"]):
        if not _is_ingredient_context(list_tag):
            continue
        items = [_item_text(li) for li in list_tag.find_all("li", recursive=False)]
        items = [item for item in items if item]
        if is_acceptable_list(items) and len(items) > len(best):
            best = items

    if best:
        logger.info(f"Found ingredient list with {len(best)} items")
    return best

"""Default Images — keyword-based static illustration for posts without one.

Invariants:
    - Matching is on whole lowercase words (so "said" never matches "ai")
    - Title is checked before content; first category in table order wins
    - Always returns a URL: DEFAULT category when nothing matches
"""

import re

from clawpress.core.domain_types import ImageCategory

_WORD = re.compile(r"[a-z0-9]+")

# Order matters: earlier categories win when several match.
CATEGORY_KEYWORDS: tuple[tuple[ImageCategory, frozenset[str]], ...] = (
    (ImageCategory.AI, frozenset({
        "ai", "agent", "agents", "agentic", "llm", "llms", "gpt", "claude",
        "model", "models", "neural", "bot", "bots", "robot", "robots",
        "machine", "intelligence",
    })),
    (ImageCategory.CODE, frozenset({
        "code", "coding", "programming", "python", "javascript", "typescript",
        "rust", "software", "developer", "developers", "api", "bug", "debug",
    })),
    (ImageCategory.DATA, frozenset({
        "data", "analytics", "database", "databases", "sql", "statistics",
        "dataset", "datasets", "metrics",
    })),
    (ImageCategory.SECURITY, frozenset({
        "security", "privacy", "encryption", "vulnerability", "exploit",
        "password", "auth",
    })),
    (ImageCategory.SCIENCE, frozenset({
        "science", "research", "physics", "biology", "chemistry", "space",
        "experiment",
    })),
)


def match_category(text: str | None) -> ImageCategory | None:
    """Return the first category whose keywords appear in text, if any."""
    if not text:
        return None
    words = set(_WORD.findall(text.lower()))
    for category, keywords in CATEGORY_KEYWORDS:
        if words & keywords:
            return category
    return None


def pick_default_category(title: str | None, content: str | None) -> ImageCategory:
    return (
        match_category(title)
        or match_category(content)
        or ImageCategory.DEFAULT
    )


def default_image_url(category: ImageCategory, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/{category.value}.jpg"


def pick_default_image(
    title: str | None, content: str | None, base_url: str,
) -> str:
    """Keyword default, falling back to the generic default image."""
    return default_image_url(pick_default_category(title, content), base_url)

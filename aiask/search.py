import re
from typing import Sequence

WEB_SEARCH_KEYWORDS = (
    "latest",
    "recent",
    "current",
    "today",
    "yesterday",
    "news",
    "update",
    "price",
    "stock",
    "weather",
    "score",
    "result",
    "released",
    "announced",
    "trending",
    "happening",
    "now",
    "breaking",
    "2024",
    "2025",
    "this week",
    "this month",
    "real-time",
    "live",
    "status",
    "outage",
    "down",
)

INFO_KEYWORDS = (
    "what is",
    "who is",
    "where is",
    "when is",
    "how to",
    "tell me about",
    "explain",
    "define",
    "information about",
)

NO_SEARCH_KEYWORDS = (
    "hi",
    "hello",
    "hey",
    "thanks",
    "thank you",
    "bye",
    "goodbye",
    "please",
    "help me write",
    "code",
    "implement",
    "fix",
    "debug",
    "create",
    "make",
    "build",
)

ENTITY_PATTERN = re.compile(r"\b(company|person|event|place|product)\b")


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def should_use_web_search(
    command: str, force_search: bool = False, no_search: bool = False
) -> bool:
    """
    Decide whether a command should be answered with live web results.

    Explicit flags win, with force_search taking precedence over no_search.
    Keywords are matched as plain substrings of the lower-cased command,
    so "hi" also matches "this".
    """
    if force_search:
        return True
    if no_search:
        return False

    lower_command = command.lower()
    time_sensitive = _contains_any(lower_command, WEB_SEARCH_KEYWORDS)

    if _contains_any(lower_command, NO_SEARCH_KEYWORDS) and not time_sensitive:
        return False
    if time_sensitive:
        return True
    if lower_command.startswith(INFO_KEYWORDS):
        return ENTITY_PATTERN.search(lower_command) is not None
    return False

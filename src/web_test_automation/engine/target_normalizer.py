"""
Target Normalizer - Strip descriptive suffixes from element targets.

People (and models) write "Login button" or "email field"; the page says
"Login" and "email". Removing one trailing descriptor improves match rates.
"""

from typing import Tuple

# Checked in order; the first match wins
TARGET_SUFFIXES: Tuple[str, ...] = (
    " button",
    " link",
    " field",
    " input",
    " text",
    " box",
    " element",
)


def normalize(target: str, suffixes: Tuple[str, ...] = TARGET_SUFFIXES) -> str:
    """
    Trim ``target`` and remove at most one descriptive suffix.

    Args:
        target: Free-text element description
        suffixes: Suffixes to try, in priority order

    Returns:
        The cleaned target

    Example:
        >>> normalize("  Login Button ")
        'Login'
        >>> normalize("Products")
        'Products'
    """
    cleaned = target.strip()
    lowered = cleaned.lower()
    for suffix in suffixes:
        if lowered.endswith(suffix):
            return cleaned[: len(cleaned) - len(suffix)].strip()
    return cleaned

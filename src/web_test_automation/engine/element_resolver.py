"""
Element Resolver - Ordered lookup strategies for clickable and input targets.

Strategies are small named functions ``(page, target) -> locator | None``.
A StrategyRunner evaluates them strategy-major over a list of target
variants; the first lookup that matches at least one element wins.

Clickable strategies (tried in order):
1. ROLE_BUTTON - button whose accessible name is the target
2. ROLE_LINK - link whose accessible name is the target
3. TEXT - any element with the target text, disambiguated towards a/button
4. ROLE_BUTTON_CONTAINS - button whose name contains the target
5. ROLE_LINK_CONTAINS - link whose name contains the target

Input strategies (tried in order):
1. LABEL - associated label text
2. PLACEHOLDER - placeholder text
3. EMAIL_TYPE - input[type='email'] when the target mentions "email"
4. PASSWORD_TYPE - input[type='password'] when the target mentions "password"
5. NAME_OR_ID - input whose name or id contains the target

Example:
    >>> resolver = ElementResolver(page)
    >>> candidate = await resolver.resolve_clickable("Login button")
    >>> if candidate:
    ...     await candidate.element.click()
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, TYPE_CHECKING
import logging

from web_test_automation.interfaces.browser import AriaRole, ILocator, IPage
from web_test_automation.engine.target_normalizer import normalize

if TYPE_CHECKING:
    from web_test_automation.reporting.step_logger import StepLogger

logger = logging.getLogger(__name__)

Lookup = Callable[[IPage, str], Optional[ILocator]]

# Tags and role attributes that mark an element as something a user clicks
CLICKABLE_TAGS = frozenset({"a", "button"})
CLICKABLE_ROLES = frozenset({"button", "link"})


@dataclass(frozen=True)
class LookupStrategy:
    """
    A named element lookup.

    Attributes:
        name: Identifier used in logs and results
        lookup: Builds a locator for a target, or returns None when the
            strategy does not apply to that target
        disambiguate: Prefer a button-like element when several match
    """
    name: str
    lookup: Lookup
    disambiguate: bool = False


@dataclass
class ResolutionCandidate:
    """The element a resolution settled on."""
    element: ILocator
    strategy: str
    target: str
    match_count: int = 1


def target_variants(raw_target: str) -> List[str]:
    """Cleaned target first, then the trimmed original; empties and repeats dropped."""
    variants: List[str] = []
    for variant in (normalize(raw_target), raw_target.strip()):
        if variant and variant not in variants:
            variants.append(variant)
    return variants


def _css_quote(value: str) -> str:
    """Quote a value for use inside a CSS attribute selector."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def clickable_strategies(exact_text: bool = True) -> List[LookupStrategy]:
    """
    Build the clickable lookup strategies in priority order.

    Args:
        exact_text: Whole-string matching for the role and text lookups;
            the two *_CONTAINS strategies always match substrings
    """
    return [
        LookupStrategy(
            "role_button",
            lambda page, t: page.get_by_role(AriaRole.BUTTON, name=t, exact=exact_text),
        ),
        LookupStrategy(
            "role_link",
            lambda page, t: page.get_by_role(AriaRole.LINK, name=t, exact=exact_text),
        ),
        LookupStrategy(
            "text",
            lambda page, t: page.get_by_text(t, exact=exact_text),
            disambiguate=True,
        ),
        LookupStrategy(
            "role_button_contains",
            lambda page, t: page.get_by_role(AriaRole.BUTTON, name=t, exact=False),
        ),
        LookupStrategy(
            "role_link_contains",
            lambda page, t: page.get_by_role(AriaRole.LINK, name=t, exact=False),
        ),
    ]


def input_strategies() -> List[LookupStrategy]:
    """Build the input lookup strategies in priority order."""
    return [
        LookupStrategy("label", lambda page, t: page.get_by_label(t)),
        LookupStrategy("placeholder", lambda page, t: page.get_by_placeholder(t)),
        LookupStrategy(
            "email_type",
            lambda page, t: page.locator("input[type='email']") if "email" in t.lower() else None,
        ),
        LookupStrategy(
            "password_type",
            lambda page, t: page.locator("input[type='password']") if "password" in t.lower() else None,
        ),
        LookupStrategy(
            "name_or_id",
            lambda page, t: page.locator(
                f"input[name*={_css_quote(t)}], input[id*={_css_quote(t)}]"
            ),
        ),
    ]


async def is_clickable(element: ILocator) -> bool:
    """True for a/button elements and elements with a button/link role."""
    tag = (await element.tag_name() or "").lower()
    if tag in CLICKABLE_TAGS:
        return True
    role = (await element.get_attribute("role") or "").lower()
    return role in CLICKABLE_ROLES


class StrategyRunner:
    """
    Evaluates lookup strategies against target variants.

    For each strategy, every variant is tried before moving on to the next
    strategy, so a higher-priority strategy on the original target beats a
    lower-priority one on the cleaned target.
    """

    def __init__(self, strategies: Sequence[LookupStrategy]):
        self._strategies = list(strategies)

    @property
    def strategies(self) -> List[LookupStrategy]:
        return list(self._strategies)

    async def run(self, page: IPage, variants: Sequence[str]) -> Optional[ResolutionCandidate]:
        """
        Return the first match, or None when nothing matched.

        Lookup errors are not caught here.
        """
        for strategy in self._strategies:
            for variant in variants:
                if not variant:
                    continue

                locator = strategy.lookup(page, variant)
                if locator is None:
                    continue

                count = await locator.count()
                if count == 0:
                    continue

                if count == 1:
                    element = locator
                elif strategy.disambiguate:
                    element = await self._pick_clickable(locator, count)
                else:
                    element = locator.first

                logger.debug(f"Strategy {strategy.name} matched {count} element(s) for '{variant}'")
                return ResolutionCandidate(
                    element=element,
                    strategy=strategy.name,
                    target=variant,
                    match_count=count,
                )
        return None

    async def _pick_clickable(self, locator: ILocator, count: int) -> ILocator:
        for i in range(count):
            candidate = locator.nth(i)
            if await is_clickable(candidate):
                return candidate
        return locator.first


class ElementResolver:
    """
    Locates elements on a page for the action executor.

    Example:
        >>> resolver = ElementResolver(page, exact_text=True)
        >>> field = await resolver.resolve_input("email")
        >>> visible = await resolver.resolve_visible_text("Welcome")
    """

    def __init__(
        self,
        page: IPage,
        exact_text: bool = True,
        step_logger: Optional["StepLogger"] = None,
    ):
        """
        Initialize the resolver.

        Args:
            page: Page to search
            exact_text: Whole-string text matching for clickables and text checks
            step_logger: Receives the execution log lines, if given
        """
        self._page = page
        self._exact_text = exact_text
        self._step_logger = step_logger
        self._clickable = StrategyRunner(clickable_strategies(exact_text))
        self._inputs = StrategyRunner(input_strategies())

    def _log(self, message: str) -> None:
        if self._step_logger:
            self._step_logger.info(message)
        else:
            logger.info(message)

    async def resolve_clickable(self, raw_target: str) -> Optional[ResolutionCandidate]:
        """Find the element a click on ``raw_target`` should land on."""
        variants = target_variants(raw_target)
        if variants and variants[0] != raw_target.strip():
            self._log(f"Cleaned target: '{raw_target}' -> '{variants[0]}'")

        candidate = await self._clickable.run(self._page, variants)
        if candidate:
            if candidate.match_count > 1:
                self._log(
                    f"Found {candidate.match_count} elements with text '{candidate.target}', "
                    f"selected via {candidate.strategy}"
                )
            else:
                self._log(f"Found element via {candidate.strategy}: {candidate.target}")
        return candidate

    async def resolve_input(self, raw_target: str) -> Optional[ResolutionCandidate]:
        """Find the input field described by ``raw_target``."""
        target = raw_target.strip()
        candidate = await self._inputs.run(self._page, [target] if target else [])
        if candidate:
            self._log(f"Found input via {candidate.strategy}: {target}")
        return candidate

    async def resolve_visible_text(self, text: str) -> bool:
        """
        Whether ``text`` is visible on the page.

        No match is False, a single match is its visibility, and several
        matches pass when any one of them is visible.
        """
        matches = self._page.get_by_text(text, exact=self._exact_text)
        count = await matches.count()

        if count == 0:
            self._log(f"Verify text '{text}': Not found")
            return False

        if count == 1:
            visible = await matches.is_visible()
            self._log(f"Verify text '{text}': {'Found and visible' if visible else 'Found but not visible'}")
            return visible

        self._log(f"Found {count} elements with text '{text}', checking visibility")
        for i in range(count):
            if await matches.nth(i).is_visible():
                self._log(f"Verify text '{text}': Found and visible (match {i + 1} of {count})")
                return True

        self._log(f"Verify text '{text}': Found {count} matches but none are visible")
        return False

    async def list_clickable(self, limit: int = 5) -> Dict[str, List[str]]:
        """
        Texts of visible buttons and links, for failure diagnostics.

        Returns:
            ``{"buttons": [...], "links": [...]}`` with up to ``limit`` each
        """
        return {
            "buttons": await self._visible_texts(self._page.get_by_role(AriaRole.BUTTON), limit),
            "links": await self._visible_texts(self._page.get_by_role(AriaRole.LINK), limit),
        }

    async def _visible_texts(self, locator: ILocator, limit: int) -> List[str]:
        texts: List[str] = []
        if limit <= 0:
            return texts
        for element in await locator.all():
            if not await element.is_visible():
                continue
            text = (await element.text_content() or "").strip()
            if text:
                texts.append(text)
            if len(texts) >= limit:
                break
        return texts

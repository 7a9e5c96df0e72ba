# uiplan/intent.py
# Rule-based intent classification: modification mode, minimality and
# negation-aware structural feature flags. No statistical model involved.
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from uiplan.schema import Plan

logger = logging.getLogger(__name__)

REGENERATE_RE = re.compile(r"\bregenerate\b|\bcompletely\b|\bstart\s+over\b", re.I)
MUTATION_RE = re.compile(r"\b(?:add|adding|modify|change|update|remove|delete)\b", re.I)

# Vocabulary that means the user asked for real structure, so a trailing
# "minimal" simplifies that structure rather than collapsing to one card.
COMPLEX_VOCABULARY = ("dashboard", "sidebar", "side bar", "navbar", "nav bar", "top bar",
                      "navigation", "two columns", "two cards", "chart", "table")
SIDE_BY_SIDE_RE = re.compile(r"side[\s-]+by[\s-]+side", re.I)
FINAL_MINIMAL_DIRECTIVES = ("minimal", "only one card", "simplif", "nothing else")

TITLE_PATTERNS = (
    re.compile(r"titled\s+['\"`]([^'\"`]+)['\"`]", re.I),
    re.compile(r"titled\s+([^\s,.;'\"`]+)", re.I),
    re.compile(r"title\s+['\"`]([^'\"`]+)['\"`]", re.I),
    re.compile(r"title\s+([^\s,.;'\"`]+)", re.I),
    re.compile(r"card\s+['\"`]([^'\"`]+)['\"`]", re.I),
)

_ARTICLE = r"(?:(?:the|a|an|any)\s+)?"


@dataclass(frozen=True)
class FeatureFlags:
    sidebar: bool = False
    navbar: bool = False
    two_columns: bool = False
    chart: bool = False
    table: bool = False
    form: bool = False
    modal: bool = False
    dashboard: bool = False
    product_card: bool = False
    item_card: bool = False
    profile_card: bool = False
    stat_card: bool = False
    hero: bool = False
    gallery: bool = False
    testimonial: bool = False
    pricing: bool = False
    search_bar: bool = False

    def active(self):
        return [name for name, value in vars(self).items() if value]


@dataclass(frozen=True)
class IntentAnalysis:
    text: str
    modification_type: str = "create"
    flags: FeatureFlags = field(default_factory=FeatureFlags)
    minimal: bool = False
    minimal_source: Optional[str] = None
    title: Optional[str] = None

    @property
    def is_edit(self) -> bool:
        return self.modification_type == "edit"


def mentioned(keyword: str, text: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}(?:s|es)?\b", text, re.I) is not None


def negated(keyword: str, text: str) -> bool:
    kw = re.escape(keyword)
    patterns = (
        rf"\bremove\s+{_ARTICLE}{kw}",
        rf"\bwithout\s+{_ARTICLE}{kw}",
        rf"\bno\s+{kw}",
        rf"\b(?:don't|do\s+not)\s+(?:add|use|include)\s+{_ARTICLE}{kw}",
    )
    return any(re.search(p, text, re.I) for p in patterns)


def requirement(keyword: str, text: str) -> bool:
    """Mentioned and not explicitly removed / excluded."""
    return mentioned(keyword, text) and not negated(keyword, text)


def has_complex_structure(text: str) -> bool:
    lower = text.lower()
    return any(term in lower for term in COMPLEX_VOCABULARY) or SIDE_BY_SIDE_RE.search(lower) is not None


def final_clauses(text: str, count: int = 2) -> str:
    clauses = [c.strip() for c in re.split(r"[.;]", text) if c.strip()]
    return ". ".join(clauses[-count:]).lower()


def detect_final_minimal(text: str) -> bool:
    if has_complex_structure(text):
        return False
    tail = final_clauses(text)
    return any(directive in tail for directive in FINAL_MINIMAL_DIRECTIVES)


def detect_minimal(text: str) -> bool:
    if has_complex_structure(text):
        return False
    lower = text.lower()
    return (
        "only one card" in lower
        or "only one" in lower
        or "nothing else" in lower
        or ("one card" in lower and "nothing else" in lower)
        or ("only" in lower and "card" in lower and "nothing else" in lower)
        or ("one" in lower and "centered" in lower and "card" in lower)
        or re.search(r"\bminimal\b", lower) is not None
    )


def extract_title(text: str) -> Optional[str]:
    for pattern in TITLE_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_flags(text: str) -> FeatureFlags:
    lower = text.lower()
    two_columns_mentioned = (SIDE_BY_SIDE_RE.search(lower) is not None
                             or any(t in lower for t in ("two columns", "two cards")))
    product = (re.search(r"product\s+card|product\s+display|product\s+listing|product\s+item|displaying.*product", lower) is not None
               and any(w in lower for w in ("image", "title", "price", "button")))
    return FeatureFlags(
        sidebar=requirement("sidebar", text) or requirement("side bar", text),
        navbar=(requirement("navbar", text) or requirement("nav bar", text)
                or requirement("navigation", text) or requirement("top bar", text)),
        # Multi-word keyword: negated by any removal wording in the instruction.
        two_columns=two_columns_mentioned and "remove" not in lower and "without" not in lower,
        chart=requirement("chart", text) or requirement("graph", text),
        table=requirement("table", text),
        form=requirement("form", text) or requirement("input", text) or requirement("login", text),
        modal=requirement("modal", text) or requirement("dialog", text),
        dashboard=requirement("dashboard", text) or requirement("overview", text),
        product_card=product,
        item_card=not product and re.search(r"item\s+card|listing\s+card|card.*\bitem|\bitem.*card", lower) is not None,
        profile_card=re.search(r"profile\s+card|user\s+card|contact\s+card|team\s+member|showing.*profile", lower) is not None,
        stat_card=re.search(r"stat\s+card|statistics|metric|counter|\bnumbers?\b|stat.*display", lower) is not None,
        hero=re.search(r"\bhero\b|banner|header\s+section|large.*header|featured|showcase", lower) is not None,
        gallery=re.search(r"gallery|grid.*images|image\s+grid|photos|portfolio|collection", lower) is not None,
        testimonial=re.search(r"testimonial|review|comment|feedback.*display|quote\s+card", lower) is not None,
        pricing=re.search(r"pricing\s+card|price.*display|\btiers?\b|plan.*card|pricing\s+table", lower) is not None,
        search_bar=re.search(r"search\s+bar|search\s+box|find.*search|search\s+with", lower) is not None,
    )


def classify_modification(text: str, previous_plan: Optional[Plan]) -> str:
    if previous_plan is None:
        return "create"
    if REGENERATE_RE.search(text):
        return "regenerate"
    if MUTATION_RE.search(text):
        return "edit"
    return "create"


def classify_intent(text: str, previous_plan: Optional[Plan] = None) -> IntentAnalysis:
    """Derive mode, minimality and flags, in strict priority order.

    Classification never fails: text that matches nothing yields empty flags,
    which the synthesizer maps to its default plan.
    """
    modification_type = classify_modification(text, previous_plan)
    if modification_type == "edit":
        logger.debug("Intent classified as edit; deferring to patcher")
        return IntentAnalysis(text=text, modification_type=modification_type)

    source = None
    if detect_final_minimal(text):
        source = "final_directive"
    elif detect_minimal(text):
        source = "minimal_phrase"

    if source:
        title = extract_title(text)
        logger.debug("Minimal intent (%s), title=%r", source, title)
        return IntentAnalysis(
            text=text,
            modification_type=modification_type,
            minimal=True,
            minimal_source=source,
            title=title,
        )

    flags = extract_flags(text)
    logger.debug("Intent flags: %s", flags.active())
    return IntentAnalysis(text=text, modification_type=modification_type, flags=flags)

# uiplan/security.py
# Input sanitation, injection deny-list, whitelist + structural validation.
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional, Set

from pydantic import ValidationError

from uiplan.errors import (
    EmptyLayoutChildren,
    ForbiddenProp,
    InjectionDetected,
    InvalidId,
    InvalidInput,
    LayoutNestedInComponent,
    PlanError,
    SchemaViolation,
    UnknownComponent,
)
from uiplan.schema import (
    DEFAULT_WHITELIST,
    LAYOUT_PROP_KEYS,
    ComponentNode,
    ComponentWhitelist,
    LayoutNode,
    Plan,
)

logger = logging.getLogger(__name__)

MAX_INTENT_LENGTH = 2000
ID_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
PROP_KEY_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Keys that would let a plan carry styling or raw markup, whatever the component.
FORBIDDEN_PROPS = frozenset({"style", "className", "css", "dangerouslySetInnerHTML"})

INJECTION_PATTERNS = (
    # Constraint bypass
    (re.compile(r"ignore\s+(previous|earlier|prior|these)\s+(rules|instructions|constraints)", re.I), "Constraint bypass attempt"),
    (re.compile(r"override\s+(constraint|rule|validation|check)", re.I), "Override attempt"),
    (re.compile(r"disable\s+(safeguard|safety|check|validation|constraint)", re.I), "Safety disable attempt"),
    (re.compile(r"bypass.*validation", re.I), "Validation bypass attempt"),
    (re.compile(r"remove.*constraint", re.I), "Constraint removal attempt"),
    # Component manipulation
    (re.compile(r"add\s+(new\s+)?component", re.I), "Dynamic component creation attempt"),
    (re.compile(r"create\s+(new\s+)?component", re.I), "Dynamic component creation attempt"),
    (re.compile(r"modify\s+(component|implementation)", re.I), "Component modification attempt"),
    (re.compile(r"generate.*component.*dynamically", re.I), "Dynamic component generation attempt"),
    # Style / markup injection
    (re.compile(r"use\s+(tailwind|styled|css|styles?)", re.I), "Style injection attempt"),
    (re.compile(r"add.*style", re.I), "Style injection attempt"),
    (re.compile(r"generate.*css", re.I), "CSS injection attempt"),
    (re.compile(r"className", re.I), "ClassName constraint bypass attempt"),
    (re.compile(r"style.*prop", re.I), "Style prop injection attempt"),
    # Code execution
    (re.compile(r"\beval\b|\bexecute\b|\brun\b.*\bcode\b", re.I), "Code execution attempt"),
    (re.compile(r"dangerous|innerHTML", re.I), "Dangerous content attempt"),
    # Rule modification
    (re.compile(r"change.*\brules?\b", re.I), "Rule modification attempt"),
    (re.compile(r"forget.*whitelist", re.I), "Whitelist bypass attempt"),
    (re.compile(r"new.*component.*type", re.I), "New component type injection attempt"),
)


class InjectionCheck(NamedTuple):
    safe: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    data: Optional[Plan] = None
    error: Optional[PlanError] = None

    @property
    def message(self) -> Optional[str]:
        return str(self.error) if self.error else None


def sanitize_intent(text: Any, max_length: int = MAX_INTENT_LENGTH) -> str:
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput("Intent must be non-empty string")
    if len(text) > max_length:
        raise InvalidInput(f"Intent exceeds maximum length ({max_length} chars)")
    return text.strip()


def check_injection(text: str) -> InjectionCheck:
    for pattern, reason in INJECTION_PATTERNS:
        if pattern.search(text):
            return InjectionCheck(False, reason)
    return InjectionCheck(True)


def ensure_safe_intent(text: Any, max_length: int = MAX_INTENT_LENGTH) -> str:
    """Sanitize then run the deny-list; raises before any classification happens."""
    cleaned = sanitize_intent(text, max_length)
    check = check_injection(cleaned)
    if not check.safe:
        logger.warning("Rejected intent: %s", check.reason)
        raise InjectionDetected(check.reason)
    return cleaned


def validate_props(props: Dict[str, Any], kind: str, node_id: Optional[str] = None) -> None:
    if not props:
        return
    for key in props:
        if key in FORBIDDEN_PROPS or not PROP_KEY_PATTERN.fullmatch(key):
            raise ForbiddenProp(key, kind, node_id)


def _validate_layout_props(node: LayoutNode) -> None:
    for key, value in node.props.items():
        if key not in LAYOUT_PROP_KEYS:
            raise SchemaViolation(f"{node.id}.props.{key}", f"unsupported layout prop on {node.kind}")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SchemaViolation(f"{node.id}.props.{key}", "layout props must be numbers")


def validate_structure(
    node,
    whitelist: ComponentWhitelist = DEFAULT_WHITELIST,
    inside_component: bool = False,
    _seen: Optional[Set[str]] = None,
) -> None:
    """Recursively enforce id format, whitelist, forbidden props and nesting rules."""
    seen = set() if _seen is None else _seen

    if not isinstance(node.id, str) or not ID_PATTERN.match(node.id):
        raise InvalidId(node.id)
    if node.id in seen:
        raise InvalidId(node.id, "duplicate node id")
    seen.add(node.id)

    if isinstance(node, LayoutNode):
        if inside_component:
            raise LayoutNestedInComponent(node.kind, node.id)
        if not whitelist.is_layout(node.kind):
            raise UnknownComponent(node.kind, node.id, "not a whitelisted layout")
        validate_props(node.props, node.kind, node.id)
        _validate_layout_props(node)
        if not node.children:
            raise EmptyLayoutChildren(node.kind, node.id)
        for child in node.children:
            validate_structure(child, whitelist, False, seen)
    elif isinstance(node, ComponentNode):
        if node.kind not in whitelist.components:
            raise UnknownComponent(node.kind, node.id)
        validate_props(node.props, node.kind, node.id)
        for child in node.children or []:
            validate_structure(child, whitelist, True, seen)
    else:
        raise SchemaViolation("", f"unexpected node type {type(node).__name__}")


def _schema_error(exc: ValidationError) -> SchemaViolation:
    first = exc.errors()[0]
    path = ".".join(str(p) for p in first.get("loc", ()))
    return SchemaViolation(path, first.get("msg", "invalid value"))


def validate_plan(plan: Any, whitelist: Optional[ComponentWhitelist] = None) -> ValidationResult:
    """Schema check + structural check. Re-validating a valid plan returns it unchanged."""
    whitelist = whitelist or DEFAULT_WHITELIST
    try:
        data = plan if isinstance(plan, Plan) else Plan.model_validate(plan)
    except ValidationError as e:
        error = _schema_error(e)
        logger.info("Plan failed schema validation: %s", error)
        return ValidationResult(valid=False, error=error)

    try:
        validate_structure(data.root, whitelist)
    except PlanError as e:
        logger.info("Plan failed structural validation: %s", e)
        return ValidationResult(valid=False, error=e)
    return ValidationResult(valid=True, data=data)

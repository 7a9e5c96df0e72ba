# uiplan/errors.py
from typing import Optional


class PlanError(Exception):
    """Base class for every terminal planning / validation failure."""
    code = "PLAN_ERROR"
    http_status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict:
        return {"code": self.code, "error": self.message}


class InjectionDetected(PlanError):
    code = "PROMPT_INJECTION_DETECTED"

    def __init__(self, reason: str):
        super().__init__(f"{reason}. Cannot process request.")
        self.reason = reason


class InvalidInput(PlanError):
    code = "INVALID_INPUT"


class SchemaViolation(PlanError):
    code = "SCHEMA_VIOLATION"
    http_status = 422

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class InvalidId(SchemaViolation):
    code = "INVALID_ID"

    def __init__(self, node_id: Optional[str], message: str = "ID must be alphanumeric with underscores"):
        super().__init__(f"id={node_id!r}", message)
        self.node_id = node_id


class ForbiddenProp(PlanError):
    code = "FORBIDDEN_PROP"
    http_status = 422

    def __init__(self, key: str, kind: str, node_id: Optional[str] = None):
        where = f" at node {node_id}" if node_id else ""
        super().__init__(f"prop '{key}' is not allowed on {kind}{where}")
        self.key = key
        self.kind = kind
        self.node_id = node_id


class UnknownComponent(PlanError):
    code = "UNKNOWN_COMPONENT"
    http_status = 422

    def __init__(self, kind: str, node_id: Optional[str] = None, detail: str = "not in whitelist"):
        super().__init__(f"{kind} {detail} (node {node_id})")
        self.kind = kind
        self.node_id = node_id


class StructuralInvariantViolation(PlanError):
    code = "STRUCTURAL_INVARIANT_VIOLATION"
    http_status = 422
    rule = "structural invariant violated"

    def __init__(self, kind: str, node_id: Optional[str] = None):
        super().__init__(f"{self.rule}: {kind} (node {node_id})")
        self.kind = kind
        self.node_id = node_id


class EmptyLayoutChildren(StructuralInvariantViolation):
    code = "EMPTY_LAYOUT_CHILDREN"
    rule = "Layout must have at least one child"


class LayoutNestedInComponent(StructuralInvariantViolation):
    code = "LAYOUT_NESTED_IN_COMPONENT"
    rule = "Layout cannot be nested inside a component"


class PlanGenerationFailure(PlanError):
    code = "PLAN_GENERATION_FAILURE"
    http_status = 500

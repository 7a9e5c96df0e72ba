# app/services/codegen.py
# Validated plan -> React TSX source using only the whitelisted system components.
import json
from typing import Any, Dict, List, Optional, Set

from uiplan.errors import UnknownComponent
from uiplan.schema import DEFAULT_WHITELIST, ComponentWhitelist, Plan, children_of
from uiplan.security import validate_plan, validate_props

COMPONENT_IMPORT_PATH = "@/components/system"
INDENT = "  "


def _escape(value: str) -> str:
    return (value.replace("\\", "\\\\").replace('"', '\\"')
            .replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t"))


def _props_to_jsx(props: Dict[str, Any]) -> List[str]:
    attrs = []
    for key, value in props.items():
        if value is None:
            continue
        if isinstance(value, str):
            attrs.append(f'{key}="{_escape(value)}"')
        else:
            # numbers, booleans, arrays and objects all go in braces as JSON
            attrs.append(f"{key}={{{json.dumps(value)}}}")
    return attrs


def _node_to_jsx(node, depth: int, whitelist: ComponentWhitelist) -> str:
    if not whitelist.allows(node.kind):
        raise UnknownComponent(node.kind, node.id)
    validate_props(node.props, node.kind, node.id)

    pad = INDENT * (depth + 2)
    attrs = _props_to_jsx(node.props)
    opening = node.kind + ("".join(" " + a for a in attrs))
    children = children_of(node)
    if not children:
        return f"{pad}<{opening} />"

    inner = "\n".join(_node_to_jsx(c, depth + 1, whitelist) for c in children)
    return f"{pad}<{opening}>\n{inner}\n{pad}</{node.kind}>"


def used_components(node, found: Optional[Set[str]] = None) -> Set[str]:
    found = set() if found is None else found
    found.add(node.kind)
    for child in children_of(node):
        used_components(child, found)
    return found


def generate_code(plan: Any, whitelist: Optional[ComponentWhitelist] = None) -> str:
    """Emit a default-exported TSX component for the plan.

    The plan is re-validated first; forbidden props and unknown kinds are
    rejected again while emitting.
    """
    whitelist = whitelist or DEFAULT_WHITELIST
    result = validate_plan(plan, whitelist)
    if not result.valid:
        raise result.error
    plan: Plan = result.data

    imports = ", ".join(sorted(used_components(plan.root)))
    body = _node_to_jsx(plan.root, 0, whitelist)

    lines = [
        "'use client';",
        "",
        "import React from 'react';",
        f"import {{ {imports} }} from '{COMPONENT_IMPORT_PATH}';",
        "",
        "export default function GeneratedUI() {",
        "  return (",
        body,
        "  );",
        "}",
    ]
    return "\n".join(lines) + "\n"

# uiplan/planner.py
# Entry point: sanitize -> injection check -> classify -> synthesize | patch -> validate.
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from uiplan.content import DEFAULT_CONTENT, TemplateContent
from uiplan.errors import PlanError, PlanGenerationFailure
from uiplan.intent import classify_intent
from uiplan.patcher import apply_edit
from uiplan.schema import DEFAULT_WHITELIST, ComponentWhitelist, Plan
from uiplan.security import MAX_INTENT_LENGTH, ensure_safe_intent, validate_plan
from uiplan.synthesizer import synthesize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerOptions:
    whitelist: ComponentWhitelist = DEFAULT_WHITELIST
    content: TemplateContent = field(default_factory=lambda: DEFAULT_CONTENT)
    max_intent_length: int = MAX_INTENT_LENGTH


@dataclass(frozen=True)
class PlanResult:
    plan: Optional[Plan] = None
    error: Optional[PlanError] = None


def _resolve_previous(previous_plan: Union[Plan, dict, None], options: PlannerOptions) -> Optional[Plan]:
    if previous_plan is None:
        return None
    result = validate_plan(previous_plan, options.whitelist)
    if not result.valid:
        raise result.error
    return result.data


def _build(text: str, previous_plan: Any, options: PlannerOptions) -> Plan:
    cleaned = ensure_safe_intent(text, options.max_intent_length)
    previous = _resolve_previous(previous_plan, options)

    analysis = classify_intent(cleaned, previous)
    if analysis.is_edit:
        candidate = apply_edit(cleaned, previous, options.content)
    else:
        candidate = synthesize(analysis, options.content)

    result = validate_plan(candidate, options.whitelist)
    if not result.valid:
        raise result.error
    return result.data


def plan_from_intent(
    text: Any,
    previous_plan: Union[Plan, dict, None] = None,
    options: Optional[PlannerOptions] = None,
) -> PlanResult:
    """Compile an instruction into a validated plan.

    Never raises: every failure comes back as ``PlanResult.error`` and no
    partial plan is returned alongside it.
    """
    options = options or PlannerOptions()
    try:
        plan = _build(text, previous_plan, options)
    except PlanError as e:
        logger.info("Plan rejected: %s", e)
        return PlanResult(error=e)
    except Exception as e:
        logger.exception("Unexpected failure while planning")
        return PlanResult(error=PlanGenerationFailure(str(e) or type(e).__name__))
    logger.debug("Plan produced (%s)", plan.modification_type)
    return PlanResult(plan=plan)

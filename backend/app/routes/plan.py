# app/routes/plan.py

from fastapi import APIRouter, Depends, HTTPException
from app.config import planner_options
from app.models.requests import DiffRequest, ExplainRequest, PlanPayload, PlanRequest
from app.models.responses import CodeResponse, DiffResponse, ExplainResponse, PlanResponse, RenderResponse
from app.services.codegen import generate_code
from app.services.explainer import explain_plan
from app.services.renderer import render_summary, render_svg
from uiplan.diff import diff_plans, summarize_diff
from uiplan.errors import PlanError
from uiplan.planner import PlannerOptions, plan_from_intent
from uiplan.schema import Plan
from uiplan.security import validate_plan
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(err: PlanError) -> HTTPException:
    return HTTPException(status_code=err.http_status, detail=err.to_dict())


def _validated(raw, options: PlannerOptions) -> Plan:
    result = validate_plan(raw, options.whitelist)
    if not result.valid:
        raise _http_error(result.error)
    return result.data


@router.post("/plan", response_model=PlanResponse)
async def create_plan(req: PlanRequest, options: PlannerOptions = Depends(planner_options)):
    result = plan_from_intent(req.intent, req.previous_plan, options)
    if result.error:
        raise _http_error(result.error)

    previous = _validated(req.previous_plan, options) if req.previous_plan else None
    summary = summarize_diff(diff_plans(previous, result.plan))
    logger.info("Plan generated: %s", summary)
    return PlanResponse(plan=result.plan.to_dict(), summary=summary)


@router.post("/diff", response_model=DiffResponse)
async def diff(req: DiffRequest, options: PlannerOptions = Depends(planner_options)):
    current = _validated(req.plan, options)
    previous = _validated(req.previous_plan, options) if req.previous_plan else None
    plan_diff = diff_plans(previous, current)
    return DiffResponse(**plan_diff.to_dict(), summary=summarize_diff(plan_diff))


@router.post("/explain", response_model=ExplainResponse)
async def explain(req: ExplainRequest, options: PlannerOptions = Depends(planner_options)):
    current = _validated(req.plan, options)
    previous = _validated(req.previous_plan, options) if req.previous_plan else None
    return ExplainResponse(explanation=explain_plan(current, previous))


@router.post("/generate-code", response_model=CodeResponse)
async def code(req: PlanPayload, options: PlannerOptions = Depends(planner_options)):
    try:
        return CodeResponse(code=generate_code(req.plan, options.whitelist))
    except PlanError as e:
        raise _http_error(e)


@router.post("/render", response_model=RenderResponse)
async def render(req: PlanPayload, options: PlannerOptions = Depends(planner_options)):
    plan = _validated(req.plan, options)
    try:
        svg = render_svg(plan, whitelist=options.whitelist)
    except PlanError as e:
        raise _http_error(e)
    return RenderResponse(svg=svg, counts=render_summary(plan)["counts"])

# app/routes/versions.py

from fastapi import APIRouter, Depends, HTTPException
from app.config import planner_options
from app.models.requests import VersionAction
from app.models.responses import VersionListResponse, VersionSummary
from app.services.version_store import VersionStore, get_version_store
from uiplan.planner import PlannerOptions
from uiplan.security import validate_plan

router = APIRouter()


def _missing(field: str) -> HTTPException:
    return HTTPException(status_code=400, detail={"code": "INVALID_INPUT", "error": f"Missing {field}"})


def _not_found(version_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail={"code": "NOT_FOUND", "error": f"Version {version_id} not found"})


@router.get("/versions", response_model=VersionListResponse)
async def list_versions(store: VersionStore = Depends(get_version_store)):
    current = store.current()
    return VersionListResponse(
        versions=[VersionSummary(id=v.id, timestamp=v.timestamp, explanation=v.explanation) for v in store.list()],
        currentId=current.id if current else None,
    )


@router.post("/versions")
async def version_action(
    req: VersionAction,
    store: VersionStore = Depends(get_version_store),
    options: PlannerOptions = Depends(planner_options),
):
    if req.action == "add":
        if not req.plan or not req.code or not req.explanation:
            raise _missing("plan, code or explanation")
        result = validate_plan(req.plan, options.whitelist)
        if not result.valid:
            raise HTTPException(status_code=result.error.http_status, detail=result.error.to_dict())
        return {"id": store.add(result.data, req.code, req.explanation)}

    if not req.version_id:
        raise _missing("versionId")

    if req.action == "get":
        record = store.get(req.version_id)
        if record is None:
            raise _not_found(req.version_id)
        return {"version": record.to_dict()}

    if req.action == "set-current":
        ok = store.set_current(req.version_id)
    else:
        ok = store.delete(req.version_id)
    if not ok:
        raise _not_found(req.version_id)
    return {"success": True}

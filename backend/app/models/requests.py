# app/models/requests.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, Literal


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PlanRequest(_Request):
    intent: str
    previous_plan: Optional[Dict[str, Any]] = Field(default=None, alias="previousPlan")


class DiffRequest(_Request):
    previous_plan: Optional[Dict[str, Any]] = Field(default=None, alias="previousPlan")
    plan: Dict[str, Any]


class ExplainRequest(_Request):
    plan: Dict[str, Any]
    previous_plan: Optional[Dict[str, Any]] = Field(default=None, alias="previousPlan")


class PlanPayload(BaseModel):
    plan: Dict[str, Any]


class VersionAction(_Request):
    action: Literal["add", "get", "set-current", "delete"]
    version_id: Optional[str] = Field(default=None, alias="versionId")
    plan: Optional[Dict[str, Any]] = None
    code: Optional[str] = None
    explanation: Optional[str] = None

from pydantic import BaseModel
from typing import List, Dict, Any, Optional


class PlanResponse(BaseModel):
    plan: Dict[str, Any]
    summary: Optional[str] = None


class DiffResponse(BaseModel):
    modificationType: str
    changedNodeIds: List[str]
    diffs: Dict[str, Dict[str, Any]]
    summary: str


class ExplainResponse(BaseModel):
    explanation: str


class CodeResponse(BaseModel):
    code: str


class RenderResponse(BaseModel):
    svg: str
    counts: Dict[str, int]


class VersionSummary(BaseModel):
    id: str
    timestamp: float
    explanation: str


class VersionListResponse(BaseModel):
    versions: List[VersionSummary]
    currentId: Optional[str] = None

"""Pydantic request/response models for the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from modelscout.costs.schemas import CostResult, CostScenario


class BatchRequest(BaseModel):
    scenarios: list[CostScenario]
    compare: bool = False


class CostListResponse(BaseModel):
    object: str = "list"
    data: list[CostResult]
    skipped: list[str] = Field(default_factory=list)


class CandidateList(BaseModel):
    object: str = "list"
    total: int
    data: list[dict[str, Any]]

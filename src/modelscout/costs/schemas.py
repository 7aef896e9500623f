"""Pydantic records for cost scenarios and results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CostScenario(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    model: str = Field(min_length=1)
    input_tokens: int = Field(ge=0, strict=True)
    output_tokens: int = Field(ge=0, strict=True)
    cached_ratio: float = Field(default=0.0, ge=0.0, le=1.0, allow_inf_nan=False)


class CompareRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    models: list[str] = Field(min_length=1)
    input_tokens: int = Field(ge=0, strict=True)
    output_tokens: int = Field(ge=0, strict=True)
    cached_ratio: float = Field(default=0.0, ge=0.0, le=1.0, allow_inf_nan=False)

    def scenarios(self) -> list[CostScenario]:
        return [
            CostScenario(
                model=name.strip(),
                input_tokens=self.input_tokens,
                output_tokens=self.output_tokens,
                cached_ratio=self.cached_ratio,
            )
            for name in self.models
            if name.strip()
        ]


class CostResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    provider: str
    input_cost: float = Field(ge=0.0)
    output_cost: float = Field(ge=0.0)
    total_cost: float = Field(ge=0.0)


class BatchOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: list[CostResult] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    """Model references that matched nothing in the catalog, in input order."""

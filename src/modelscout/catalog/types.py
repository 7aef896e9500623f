"""Provider and model records as served by the catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


def _price(data: dict[str, Any], key: str) -> float:
    value = float(data.get(key, 0.0) or 0.0)
    if value < 0 or not math.isfinite(value):
        raise ValueError(f"model {data.get('id')!r}: {key} must be a non-negative number, got {value}")
    return value


@dataclass(frozen=True)
class Model:
    """Static metadata about a model."""

    id: str
    name: str
    cost_per_1m_in: float = 0.0
    cost_per_1m_out: float = 0.0
    cost_per_1m_in_cached: float = 0.0
    """USD per 1M cached input tokens, 0 when prompt caching is unsupported."""

    cost_per_1m_out_cached: float = 0.0
    context_window: int = 0
    default_max_tokens: int = 0
    can_reason: bool = False
    supports_images: bool = False
    reasoning_levels: tuple[str, ...] = ()
    default_reasoning_effort: str = ""

    @property
    def has_cached_pricing(self) -> bool:
        return self.cost_per_1m_in_cached > 0 or self.cost_per_1m_out_cached > 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Model:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            cost_per_1m_in=_price(data, "cost_per_1m_in"),
            cost_per_1m_out=_price(data, "cost_per_1m_out"),
            cost_per_1m_in_cached=_price(data, "cost_per_1m_in_cached"),
            cost_per_1m_out_cached=_price(data, "cost_per_1m_out_cached"),
            context_window=int(data.get("context_window", 0) or 0),
            default_max_tokens=int(data.get("default_max_tokens", 0) or 0),
            can_reason=bool(data.get("can_reason", False)),
            supports_images=bool(data.get("supports_attachments", data.get("supports_images", False))),
            # ordered, duplicates dropped
            reasoning_levels=tuple(dict.fromkeys(data.get("reasoning_levels") or ())),
            default_reasoning_effort=str(data.get("default_reasoning_effort") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cost_per_1m_in": self.cost_per_1m_in,
            "cost_per_1m_out": self.cost_per_1m_out,
            "cost_per_1m_in_cached": self.cost_per_1m_in_cached,
            "cost_per_1m_out_cached": self.cost_per_1m_out_cached,
            "context_window": self.context_window,
            "default_max_tokens": self.default_max_tokens,
            "can_reason": self.can_reason,
            "supports_attachments": self.supports_images,
            "reasoning_levels": list(self.reasoning_levels),
            "default_reasoning_effort": self.default_reasoning_effort,
        }


@dataclass(frozen=True)
class Provider:
    id: str
    name: str
    type: str = ""
    api_endpoint: str = ""
    api_key: str = ""
    default_headers: dict[str, str] = field(default_factory=dict, hash=False)
    default_large_model_id: str = ""
    default_small_model_id: str = ""
    models: tuple[Model, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Provider:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            type=str(data.get("type") or ""),
            api_endpoint=str(data.get("api_endpoint") or ""),
            api_key=str(data.get("api_key") or ""),
            default_headers={str(k): str(v) for k, v in (data.get("default_headers") or {}).items()},
            default_large_model_id=str(data.get("default_large_model_id") or ""),
            default_small_model_id=str(data.get("default_small_model_id") or ""),
            models=tuple(Model.from_dict(m) for m in data.get("models") or ()),
        )

    def to_dict(self, models: list[Model] | None = None) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "api_endpoint": self.api_endpoint,
            "api_key": self.api_key,
            "default_headers": dict(self.default_headers),
            "default_large_model_id": self.default_large_model_id,
            "default_small_model_id": self.default_small_model_id,
            "models": [m.to_dict() for m in (self.models if models is None else models)],
        }


def parse_providers(payload: Any) -> list[Provider]:
    """Parse a catalog payload (a list of provider records) preserving order."""
    if isinstance(payload, dict) and "providers" in payload:
        payload = payload["providers"]
    if not isinstance(payload, list):
        raise ValueError("catalog payload must be a list of providers")
    return [Provider.from_dict(item) for item in payload]

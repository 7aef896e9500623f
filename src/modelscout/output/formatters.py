"""Table, JSON and CSV rendering of engine results."""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from modelscout.catalog.types import Model, Provider
from modelscout.costs.schemas import CostResult
from modelscout.errors import UnsupportedOutputModeError
from modelscout.matching.types import MatchCandidate

RULE = "─" * 80
HEAVY_RULE = "═" * 80


def check_format(fmt: str, allowed: tuple[str, ...] = ("table", "json", "csv")) -> str:
    value = fmt.lower()
    if value not in allowed:
        raise UnsupportedOutputModeError("format", fmt, allowed)
    return value


def _json(data: Any) -> str:
    return json.dumps(data, indent=2)


def _csv(header: list[str], rows: list[list[Any]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buf.getvalue()


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _truncate(name: str, width: int = 40) -> str:
    return name if len(name) <= width else name[: width - 3] + "..."


def candidate_record(candidate: MatchCandidate) -> dict[str, Any]:
    model = candidate.model
    return {
        "model": model.name,
        "model_id": model.id,
        "provider": candidate.provider.name,
        "score": candidate.score,
        "cost_per_1m_in": model.cost_per_1m_in,
        "cost_per_1m_out": model.cost_per_1m_out,
        "context_window": model.context_window,
        "can_reason": model.can_reason,
        "supports_images": model.supports_images,
        "reasons": list(candidate.reasons),
    }


def render_matches(candidates: list[MatchCandidate], fmt: str = "table", total: int | None = None) -> str:
    fmt = check_format(fmt)
    if fmt == "json":
        return _json([candidate_record(c) for c in candidates])
    if fmt == "csv":
        return _csv(
            ["Model", "Provider", "Score", "CostPer1MIn", "CostPer1MOut", "ContextWindow", "CanReason", "SupportsImages"],
            [
                [
                    c.model.name,
                    c.provider.name,
                    f"{c.score:.2f}",
                    f"{c.model.cost_per_1m_in:.2f}",
                    f"{c.model.cost_per_1m_out:.2f}",
                    c.model.context_window,
                    str(c.model.can_reason).lower(),
                    str(c.model.supports_images).lower(),
                ]
                for c in candidates
            ],
        )

    lines = ["Matching Models", HEAVY_RULE, ""]
    for i, c in enumerate(candidates, start=1):
        m = c.model
        lines.append(f"[{c.score:.0f}] #{i} {m.name}")
        lines.append(f"  Provider: {c.provider.name}")
        lines.append(f"  Cost: ${m.cost_per_1m_in:.2f}/1M in, ${m.cost_per_1m_out:.2f}/1M out | Context: {m.context_window // 1000}K")
        if m.can_reason:
            lines.append("  ✓ Reasoning")
        if m.supports_images:
            lines.append("  ✓ Vision")
        lines.append("")
    lines.append(f"Showing top {len(candidates)} of {total if total is not None else len(candidates)} matches")
    return "\n".join(lines)


def render_comparison(candidates: list[MatchCandidate], fmt: str = "table") -> str:
    """Side-by-side capabilities of explicitly named models; nothing is scored."""
    fmt = check_format(fmt)
    if fmt == "json":
        return _json([
            {k: v for k, v in candidate_record(c).items() if k not in ("score", "reasons")} for c in candidates
        ])
    if fmt == "csv":
        return _csv(
            ["Model", "Provider", "CostPer1MIn", "CostPer1MOut", "ContextWindow", "CanReason", "SupportsImages"],
            [
                [
                    c.model.name,
                    c.provider.name,
                    f"{c.model.cost_per_1m_in:.2f}",
                    f"{c.model.cost_per_1m_out:.2f}",
                    c.model.context_window,
                    str(c.model.can_reason).lower(),
                    str(c.model.supports_images).lower(),
                ]
                for c in candidates
            ],
        )

    lines = ["Model Comparison", HEAVY_RULE, ""]
    for c in candidates:
        m = c.model
        lines.append(m.name)
        lines.append(f"  Provider: {c.provider.name}")
        lines.append(f"  Cost: ${m.cost_per_1m_in:.2f}/1M in, ${m.cost_per_1m_out:.2f}/1M out")
        lines.append(f"  Context: {m.context_window // 1000}K tokens")
        lines.append(f"  Reasoning: {_yes_no(m.can_reason)} | Vision: {_yes_no(m.supports_images)}")
        lines.append("")
    return "\n".join(lines)


def render_recommendations(candidates: list[MatchCandidate]) -> str:
    """Detailed wizard output: one block per recommended model with its reasons."""
    lines = []
    for i, c in enumerate(candidates, start=1):
        m = c.model
        lines.append(f"#{i}: {m.name}")
        lines.append(f"  Provider: {c.provider.name}")
        lines.append(f"  Cost: ${m.cost_per_1m_in:.2f}/1M in, ${m.cost_per_1m_out:.2f}/1M out")
        lines.append(f"  Context: {m.context_window // 1000}K tokens")
        lines.append(f"  Reasoning: {_yes_no(m.can_reason)} | Vision: {_yes_no(m.supports_images)}")
        if c.reasons:
            lines.append("  Reasons: " + ", ".join(c.reasons))
        lines.append("")
    lines.append("─" * 60)
    return "\n".join(lines)


def render_cost_results(results: list[CostResult], fmt: str = "table") -> str:
    fmt = check_format(fmt)
    if fmt == "json":
        return _json([r.model_dump() for r in results])
    if fmt == "csv":
        return _csv(
            ["Model", "Provider", "InputCost", "OutputCost", "TotalCost"],
            [[r.model, r.provider, f"{r.input_cost:.4f}", f"{r.output_cost:.4f}", f"{r.total_cost:.4f}"] for r in results],
        )

    if not results:
        return "No results to display."
    lines = ["Cost Calculation Results", HEAVY_RULE, ""]
    lines.append(f"{'Model':<42} {'Input':>9} {'Output':>9} {'Total':>9}")
    lines.append(RULE)
    for r in results:
        lines.append(f"{_truncate(r.model):<42} ${r.input_cost:>8.4f} ${r.output_cost:>8.4f} ${r.total_cost:>8.4f}")
    lines.append(RULE)
    lines.append("")
    lines.append("Provider Information")
    lines.extend(f"{r.model}: {r.provider}" for r in results)
    return "\n".join(lines)


def render_models(provider: Provider, models: list[Model], fmt: str = "table") -> str:
    fmt = check_format(fmt)
    if fmt == "json":
        return _json(provider.to_dict(models))
    if fmt == "csv":
        return _csv(
            ["ID", "Name", "CostPer1MIn", "CostPer1MOut", "ContextWindow", "CanReason", "SupportsImages"],
            [
                [
                    m.id,
                    m.name,
                    f"{m.cost_per_1m_in:.2f}",
                    f"{m.cost_per_1m_out:.2f}",
                    m.context_window,
                    str(m.can_reason).lower(),
                    str(m.supports_images).lower(),
                ]
                for m in models
            ],
        )

    if not models:
        return "No models found matching the criteria."
    lines = [f"Provider: {provider.name}", f"Type: {provider.type}", f"Models: {len(models)}", ""]
    lines.append(f"{'Model Name':<42} {'Cost/1M':>8} {'Context':>8} {'Reas':>5} {'Vis':>5}")
    lines.append(RULE)
    for m in models:
        lines.append(
            f"{_truncate(m.name):<42} {m.cost_per_1m_in:>8.2f} {str(m.context_window // 1000) + 'K':>8} "
            f"{'✓' if m.can_reason else ' ':>5} {'✓' if m.supports_images else ' ':>5}"
        )
    lines.append(RULE)
    return "\n".join(lines)


def render_providers(providers: list[Provider], fmt: str = "table") -> str:
    fmt = check_format(fmt, ("table", "json"))
    if fmt == "json":
        return _json([p.to_dict() for p in providers])

    if not providers:
        return "No providers found."
    lines = ["Available AI Providers", RULE, ""]
    for p in providers:
        lines.append(f"{p.name} ({p.id})")
        lines.append(f"  Type: {p.type}")
        lines.append(f"  Models: {len(p.models)}")
        if p.default_large_model_id:
            lines.append(f"  Default Large: {p.default_large_model_id}")
        if p.default_small_model_id:
            lines.append(f"  Default Small: {p.default_small_model_id}")
        lines.append("")
    lines.append(f"Total: {len(providers)} providers")
    return "\n".join(lines)


def export_record(model: Model, provider: Provider) -> dict[str, Any]:
    return {
        "model": model.to_dict(),
        "provider": provider.to_dict(),
        "api_config": {
            "endpoint": provider.api_endpoint,
            "api_key": provider.api_key,
            "headers": dict(provider.default_headers),
        },
    }


def render_model_info(model: Model, provider: Provider, export: bool = False) -> str:
    if export:
        return _json(export_record(model, provider))

    lines = ["Model Information", HEAVY_RULE, ""]
    lines += [f"Name: {model.name}", f"ID: {model.id}", f"Provider: {provider.name}", f"Type: {provider.type}", ""]
    lines += ["Pricing", "─" * 40]
    lines.append(f"Input Cost: ${model.cost_per_1m_in:.2f} per 1M input tokens")
    lines.append(f"Output Cost: ${model.cost_per_1m_out:.2f} per 1M output tokens")
    if model.has_cached_pricing:
        lines += ["", "Cached Pricing (with prompt caching):"]
        lines.append(f"Input: ${model.cost_per_1m_in_cached:.2f} per 1M cached input tokens")
        lines.append(f"Output: ${model.cost_per_1m_out_cached:.2f} per 1M cached output tokens")
    lines += ["", "Capabilities", "─" * 40]
    lines.append(f"Context Window: {model.context_window // 1000}K tokens")
    lines.append(f"Default Max Tokens: {model.default_max_tokens} tokens")
    lines.append(f"Reasoning: {'✓ Supported' if model.can_reason else '✗ Not supported'}")
    lines.append(f"Vision: {'✓ Supported' if model.supports_images else '✗ Not supported'}")
    if model.can_reason:
        lines += ["", "Reasoning Configuration", "─" * 40]
        if model.default_reasoning_effort:
            lines.append(f"Default Level: {model.default_reasoning_effort}")
        if model.reasoning_levels:
            lines.append(f"Available Levels: {', '.join(model.reasoning_levels)}")
    lines += ["", "Example Usage", "─" * 40, "Provider Endpoint:", f"  {provider.api_endpoint}", ""]
    lines += ["Default Headers:"]
    lines.extend(f"  {k}: {v}" for k, v in provider.default_headers.items())
    lines.append(HEAVY_RULE)
    return "\n".join(lines)

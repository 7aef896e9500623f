"""Command-line interface: browse the catalog, match models, estimate costs, chat."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import typer

from modelscout.catalog.lookup import find_model, find_models, find_provider, resolve_chat_model
from modelscout.catalog.store import CatalogStore, build_source
from modelscout.catalog.types import Provider
from modelscout.chat.client import CompletionClient, env_key_name, resolve_api_key
from modelscout.chat.session import ChatSession
from modelscout.config import Settings, get_settings
from modelscout.costs.estimator import compare_models, estimate_batch, estimate_scenario, load_batch_file
from modelscout.costs.schemas import CompareRequest, CostScenario
from modelscout.errors import InvalidScenarioError, ModelScoutError, RemoteCallError
from modelscout.matching.engine import find_matches
from modelscout.matching.listing import filter_models, list_providers, sort_models
from modelscout.matching.types import MatchCandidate, Requirements, collect_candidates
from modelscout.observability.logging import setup_logging
from modelscout.observability.metrics import get_metrics
from modelscout.output.formatters import (
    check_format,
    render_comparison,
    render_cost_results,
    render_matches,
    render_model_info,
    render_models,
    render_providers,
    render_recommendations,
)
from modelscout.wizard.machine import WizardSession
from modelscout.wizard.states import STEP_TITLES, WizardEvent, WizardState

logger = logging.getLogger("modelscout.cli")

app = typer.Typer(help="Find, compare and cost-estimate AI models from a provider catalog")


@app.callback()
def main(
    ctx: typer.Context,
    catalog: Path | None = typer.Option(None, "--catalog", help="Local YAML/JSON catalog file"),
    catalog_url: str | None = typer.Option(None, "--catalog-url", help="Catalog service URL"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    """Shared options; settings are built once and passed to every command."""

    overrides: dict[str, object] = {}
    if catalog is not None:
        overrides["catalog_path"] = str(catalog)
    if catalog_url is not None:
        overrides["catalog_url"] = catalog_url
    if log_level is not None:
        overrides["log_level"] = log_level

    settings = Settings(**overrides) if overrides else get_settings()
    setup_logging(settings.log_level)
    ctx.obj = settings


@contextmanager
def _exit_on_error() -> Iterator[None]:
    try:
        yield
    except ModelScoutError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


def _providers(settings: Settings) -> list[Provider]:
    store = CatalogStore(build_source(settings), metrics=get_metrics())
    return store.refresh()


def _format(settings: Settings, fmt: str | None) -> str:
    return check_format(fmt or settings.default_output_format)


@app.command("providers")
def providers_cmd(
    ctx: typer.Context,
    provider_type: str | None = typer.Option(None, "--type", help="Only providers of this type"),
    fmt: str = typer.Option("table", "--format", help="table or json"),
) -> None:
    """List providers sorted by name."""

    settings: Settings = ctx.obj
    with _exit_on_error():
        check_format(fmt, ("table", "json"))
        providers = list_providers(_providers(settings), provider_type)
        typer.echo(render_providers(providers, fmt))


@app.command("models")
def models_cmd(
    ctx: typer.Context,
    provider_id: str = typer.Option(..., "--provider", help="Provider ID"),
    reasoning: bool = typer.Option(False, "--reasoning", help="Only reasoning-capable models"),
    vision: bool = typer.Option(False, "--vision", help="Only vision-capable models"),
    sort: str = typer.Option("name", "--sort", help="name, cost or context"),
    fmt: str | None = typer.Option(None, "--format", help="table, json or csv"),
) -> None:
    """List one provider's models."""

    settings: Settings = ctx.obj
    with _exit_on_error():
        output = _format(settings, fmt)
        provider = find_provider(_providers(settings), provider_id)
        models = sort_models(filter_models(provider.models, reasoning, vision), sort)
        typer.echo(render_models(provider, models, output))


@app.command("find")
def find_cmd(
    ctx: typer.Context,
    max_cost: float = typer.Option(0.0, "--max-cost", help="Maximum cost per 1M input tokens (0 = no limit)"),
    min_context: int = typer.Option(0, "--min-context", help="Minimum context window (0 = no limit)"),
    reasoning: bool = typer.Option(False, "--reasoning"),
    vision: bool = typer.Option(False, "--vision"),
    limit: int | None = typer.Option(None, "--limit", help="Number of matches to show"),
    compare: str | None = typer.Option(None, "--compare", help="Comma-separated models to show side by side"),
    fmt: str | None = typer.Option(None, "--format", help="table, json or csv"),
) -> None:
    """Filter, score and rank models across all providers.

    With ``--compare`` the named models are shown side by side instead.
    """

    settings: Settings = ctx.obj
    with _exit_on_error():
        output = _format(settings, fmt)
        if compare is not None:
            found, missing = find_models(_providers(settings), compare.split(","))
            _report_skipped(missing)
            if not found:
                typer.echo("No models found.")
                return
            typer.echo(render_comparison([MatchCandidate(model=m, provider=p) for m, p in found], output))
            return

        requirements = Requirements(budget=max_cost, min_context=min_context, reasoning=reasoning, vision=vision)
        ranking = find_matches(_providers(settings), requirements, settings)
        if not ranking:
            typer.echo("No models found matching criteria.")
            return
        shown = ranking.top(limit if limit is not None else settings.search_limit)
        typer.echo(render_matches(shown, output, total=len(ranking)))


@app.command("info")
def info_cmd(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="Model name or ID"),
    provider_id: str | None = typer.Option(None, "--provider", help="Restrict the lookup to one provider"),
    export: bool = typer.Option(False, "--export", help="Export the model configuration as JSON"),
) -> None:
    """Show everything the catalog knows about one model."""

    settings: Settings = ctx.obj
    with _exit_on_error():
        found, provider = find_model(_providers(settings), model, provider_id, metrics=get_metrics())
        typer.echo(render_model_info(found, provider, export=export))


@app.command("cost")
def cost_cmd(
    ctx: typer.Context,
    model: str = typer.Option(..., "--model", help="Model name or ID"),
    input_tokens: int = typer.Option(0, "--input", help="Number of input tokens"),
    output_tokens: int = typer.Option(0, "--output", help="Number of output tokens"),
    cached: float = typer.Option(0.0, "--cached", help="Ratio of cached input tokens (0-1)"),
    fmt: str | None = typer.Option(None, "--format", help="table, json or csv"),
) -> None:
    """Estimate the cost of one request."""

    settings: Settings = ctx.obj
    if input_tokens <= 0 or output_tokens <= 0:
        typer.echo("Error: --input and --output are required.", err=True)
        raise typer.Exit(1)

    with _exit_on_error():
        output = _format(settings, fmt)
        scenario = _scenario(model, input_tokens, output_tokens, cached)
        result = estimate_scenario(_providers(settings), scenario)
        get_metrics().cost_estimates.inc()
        typer.echo(render_cost_results([result], output))


@app.command("compare")
def compare_cmd(
    ctx: typer.Context,
    models: str = typer.Argument(..., help="Comma-separated model names or IDs"),
    input_tokens: int = typer.Option(..., "--input", help="Number of input tokens"),
    output_tokens: int = typer.Option(..., "--output", help="Number of output tokens"),
    cached: float = typer.Option(0.0, "--cached", help="Ratio of cached input tokens (0-1)"),
    fmt: str | None = typer.Option(None, "--format", help="table, json or csv"),
) -> None:
    """Compare the cost of one request across models, cheapest first."""

    settings: Settings = ctx.obj
    with _exit_on_error():
        output = _format(settings, fmt)
        request = _compare_request(models.split(","), input_tokens, output_tokens, cached)
        outcome = compare_models(_providers(settings), request, metrics=get_metrics())
        _report_skipped(outcome.skipped)
        if not outcome.results:
            typer.echo("No models found.")
            return
        typer.echo(render_cost_results(outcome.results, output))


@app.command("batch")
def batch_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., help="JSON files with cost scenarios"),
    compare: bool = typer.Option(False, "--compare", help="Sort results by total cost"),
    fmt: str | None = typer.Option(None, "--format", help="table, json or csv"),
) -> None:
    """Estimate costs for every scenario in one or more batch files.

    A file with an invalid record is skipped as a whole and the command
    exits non-zero after processing the others.
    """

    settings: Settings = ctx.obj
    failed = False
    scenarios: list[CostScenario] = []

    with _exit_on_error():
        output = _format(settings, fmt)
        for path in files:
            try:
                scenarios.extend(load_batch_file(path))
            except InvalidScenarioError as exc:
                if exc.structural:
                    raise
                logger.error("Skipping batch file: %s", exc)
                typer.echo(f"Error: {exc}", err=True)
                failed = True

        outcome = estimate_batch(_providers(settings), scenarios, compare=compare, metrics=get_metrics())
        _report_skipped(outcome.skipped)
        if outcome.results:
            typer.echo(render_cost_results(outcome.results, output))
        else:
            typer.echo("No valid scenarios found.")

    if failed:
        raise typer.Exit(1)


@app.command("wizard")
def wizard_cmd(ctx: typer.Context) -> None:
    """Answer a few questions to find the best model for your needs."""

    settings: Settings = ctx.obj
    with _exit_on_error():
        candidates = collect_candidates(_providers(settings))
    session = WizardSession(candidates, settings, metrics=get_metrics())

    typer.echo("AI Model Selector")
    typer.echo("Answer a few questions to find the best model for your needs (q to quit)\n")

    while not session.done:
        typer.echo(STEP_TITLES[session.state])
        if session.state == WizardState.SHOW_RESULTS:
            for i, c in enumerate(session.preview(), start=1):
                typer.echo(f"  {i}. {c.model.name} ({c.provider.name}) - Score: {c.score:.0f}")
            typer.echo("")
            typer.echo(render_recommendations(session.details()))

        for i, choice in enumerate(session.choices, start=1):
            typer.echo(f"  {i}. {choice.label}")

        try:
            answer = typer.prompt("Select" if session.choices else "Press Enter to exit", default="", show_default=False)
        except typer.Abort:
            answer = "q"

        answer = answer.strip().lower()
        if answer in ("q", "quit"):
            session.handle(WizardEvent.cancel())
            break
        if not session.choices:
            session.handle(WizardEvent.confirm())
            break
        if not answer.isdigit():
            typer.echo("Enter the number of your choice.")
            continue
        try:
            session.handle(WizardEvent.confirm(int(answer) - 1))
        except ValueError as exc:
            typer.echo(str(exc))
        typer.echo("")


@app.command("chat")
def chat_cmd(
    ctx: typer.Context,
    provider_id: str = typer.Option(..., "--provider", help="Provider ID (e.g., openai, anthropic)"),
    model_id: str | None = typer.Option(None, "--model", help="Model ID (overrides the provider default)"),
    system: str | None = typer.Option(None, "--system", help="System prompt for the conversation"),
    max_tokens: int = typer.Option(0, "--max-tokens", help="Max tokens for a response (0 = model default)"),
    api_key: str | None = typer.Option(None, "--api-key", help="API key (overrides env var and provider config)"),
    debug: bool = typer.Option(False, "--debug", help="Show endpoint and header details"),
) -> None:
    """Chat with a catalog model and track tokens and cost."""

    settings: Settings = ctx.obj
    with _exit_on_error():
        providers = _providers(settings)
        provider = find_provider(providers, provider_id)
        model = resolve_chat_model(provider, model_id)

    key = resolve_api_key(provider, api_key)
    if not key:
        typer.echo("No API key found! Provide one with --api-key or " + env_key_name(provider.id), err=True)
        raise typer.Exit(1)

    if debug:
        typer.echo(f"Endpoint: {provider.api_endpoint}")
        typer.echo(f"API Key: {key[:4]}...{key[-4:]}")
        typer.echo(f"Type: {provider.type}")
        for name, value in provider.default_headers.items():
            typer.echo(f"  {name}: {value}")

    typer.echo(f"Provider: {provider.name}")
    typer.echo(f"Model: {model.name}")
    typer.echo(f"Pricing: ${model.cost_per_1m_in:.4f}/1M input, ${model.cost_per_1m_out:.4f}/1M output")
    typer.echo(f"Context: {model.context_window // 1000}K tokens")
    typer.echo("Commands: /clear /cost /help /quit\n")

    with CompletionClient(provider, key, timeout=settings.completion_timeout) as client:
        session = ChatSession.start(provider, model, client, system_prompt=system, max_tokens=max_tokens, metrics=get_metrics())
        _chat_loop(session)


def _chat_loop(session: ChatSession) -> None:
    while True:
        try:
            text = typer.prompt("You", default="", show_default=False).strip()
        except typer.Abort:
            typer.echo("\nGoodbye!")
            return

        if not text:
            continue

        if text.startswith("/"):
            result = session.handle_command(text)
            typer.echo("\n".join(result.lines), err=result.error)
            if result.terminate:
                return
            continue

        try:
            exchange = session.send(text)
        except RemoteCallError as exc:
            typer.echo(f"Error: {exc}", err=True)
            continue

        typer.echo(f"AI: {exchange.content}")
        typer.echo(
            f"→ tokens: {exchange.input_tokens + exchange.output_tokens} "
            f"(in: {exchange.input_tokens}, out: {exchange.output_tokens}) | "
            f"cost: ${exchange.cost:.6f} | session: ${session.total_cost:.6f}\n"
        )


@app.command("serve")
def serve_cmd(ctx: typer.Context) -> None:
    """Run the HTTP API."""

    import uvicorn

    from modelscout.app import create_app

    settings: Settings = ctx.obj
    uvicorn.run(create_app(settings.model_dump()), host=settings.host, port=settings.port)


def _scenario(model: str, input_tokens: int, output_tokens: int, cached: float) -> CostScenario:
    try:
        return CostScenario(model=model, input_tokens=input_tokens, output_tokens=output_tokens, cached_ratio=cached)
    except ValueError as exc:
        raise InvalidScenarioError(str(exc)) from exc


def _compare_request(models: list[str], input_tokens: int, output_tokens: int, cached: float) -> CompareRequest:
    try:
        return CompareRequest(models=models, input_tokens=input_tokens, output_tokens=output_tokens, cached_ratio=cached)
    except ValueError as exc:
        raise InvalidScenarioError(str(exc)) from exc


def _report_skipped(skipped: list[str]) -> None:
    if skipped:
        typer.echo(f"Skipped (not found): {', '.join(skipped)}", err=True)


if __name__ == "__main__":
    app()

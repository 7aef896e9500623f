"""Domain error kinds shared by the engine, the CLI and the HTTP layer."""

from __future__ import annotations


class ModelScoutError(Exception):
    """Base class for every error raised by modelscout."""

    code = "modelscout_error"


class NotFoundError(ModelScoutError):
    """No provider or model matched a lookup token."""

    code = "not_found"

    def __init__(self, kind: str, token: str) -> None:
        super().__init__(f"{kind.capitalize()} not found: {token}")
        self.kind = kind
        self.token = token


class InvalidScenarioError(ModelScoutError):
    """A cost scenario or batch file failed validation."""

    code = "invalid_scenario"

    def __init__(self, message: str, source: str | None = None, structural: bool = False) -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source
        # True when the input could not be parsed at all, not just one bad record
        self.structural = structural


class UnsupportedOutputModeError(ModelScoutError):
    """An output format or sort selector is not recognised."""

    code = "unsupported_output_mode"

    def __init__(self, selector: str, value: str, allowed: tuple[str, ...]) -> None:
        super().__init__(f"Unknown {selector}: {value} (use {', '.join(repr(a) for a in allowed)})")
        self.selector = selector
        self.value = value
        self.allowed = allowed


class CatalogUnavailableError(ModelScoutError):
    """The catalog could not be fetched for a reason other than "not modified"."""

    code = "catalog_unavailable"


class RemoteCallError(ModelScoutError):
    """The chat completion call failed."""

    code = "remote_provider_error"

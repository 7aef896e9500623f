"""Chat session history and running token/cost totals."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from modelscout.catalog.types import Model, Provider
from modelscout.chat.client import Completion
from modelscout.costs.estimator import calculate_cost
from modelscout.errors import RemoteCallError
from modelscout.observability.metrics import Metrics

logger = logging.getLogger("modelscout.chat")

HELP_TEXT = (
    "Available commands:",
    "  /clear  - Clear conversation history",
    "  /cost   - Show current session cost",
    "  /help   - Show this help",
    "  /quit   - Exit the chat",
)


class Completer(Protocol):
    def complete(self, model_id: str, messages: list[dict[str, str]], max_tokens: int | None = None) -> Completion:
        ...


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Exchange:
    content: str
    input_tokens: int
    output_tokens: int
    cost: float


@dataclass(frozen=True)
class CommandResult:
    lines: tuple[str, ...] = ()
    terminate: bool = False
    error: bool = False


@dataclass
class ChatSession:
    provider: Provider
    model: Model
    completer: Completer
    max_tokens: int | None = None
    metrics: Metrics | None = None
    messages: list[ChatMessage] = field(default_factory=list)
    total_tokens: int = 0
    total_cost: float = 0.0

    @classmethod
    def start(
        cls,
        provider: Provider,
        model: Model,
        completer: Completer,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
        metrics: Metrics | None = None,
    ) -> ChatSession:
        session = cls(provider=provider, model=model, completer=completer, max_tokens=max_tokens, metrics=metrics)
        if system_prompt:
            session.messages.append(ChatMessage("system", system_prompt))
        return session

    def effective_max_tokens(self) -> int | None:
        if self.max_tokens and self.max_tokens > 0:
            return self.max_tokens
        return self.model.default_max_tokens or None

    def send(self, text: str) -> Exchange:
        """Run one user/assistant exchange.

        The user message is appended before the call and removed again if
        the call fails, so history never holds an unanswered turn.  The
        ``RemoteCallError`` is re-raised after the rollback.
        """
        self.messages.append(ChatMessage("user", text))
        try:
            completion = self.completer.complete(
                self.model.id,
                [m.to_dict() for m in self.messages],
                self.effective_max_tokens(),
            )
        except RemoteCallError:
            self.messages.pop()
            self._record("error")
            raise

        cached_ratio = completion.cached_tokens / completion.input_tokens if completion.input_tokens else 0.0
        input_cost, output_cost = calculate_cost(
            self.model, completion.input_tokens, completion.output_tokens, min(cached_ratio, 1.0)
        )
        exchange = Exchange(
            content=completion.content,
            input_tokens=completion.input_tokens,
            output_tokens=completion.output_tokens,
            cost=input_cost + output_cost,
        )

        self.messages.append(ChatMessage("assistant", completion.content))
        self.total_tokens += exchange.input_tokens + exchange.output_tokens
        self.total_cost += exchange.cost

        self._record("ok")
        if self.metrics:
            self.metrics.chat_tokens.labels(direction="input").inc(exchange.input_tokens)
            self.metrics.chat_tokens.labels(direction="output").inc(exchange.output_tokens)
        return exchange

    def clear(self) -> None:
        if self.messages and self.messages[0].role == "system":
            self.messages = self.messages[:1]
        else:
            self.messages = []

    def handle_command(self, command: str) -> CommandResult:
        cmd = command.strip().lower()

        if cmd in ("/quit", "/exit", "/q"):
            return CommandResult(
                lines=(
                    "Session Summary:",
                    f"  Total tokens: {self.total_tokens}",
                    f"  Total cost: ${self.total_cost:.6f}",
                    "Goodbye!",
                ),
                terminate=True,
            )

        if cmd == "/clear":
            self.clear()
            return CommandResult(lines=("Conversation cleared.",))

        if cmd == "/cost":
            return CommandResult(
                lines=(
                    "Session Statistics:",
                    f"  Messages: {len(self.messages)}",
                    f"  Total tokens: {self.total_tokens}",
                    f"  Total cost: ${self.total_cost:.6f}",
                )
            )

        if cmd == "/help":
            return CommandResult(lines=HELP_TEXT)

        return CommandResult(
            lines=(f"Unknown command: {command.strip()}", "Type /help for available commands."),
            error=True,
        )

    def _record(self, outcome: str) -> None:
        if self.metrics:
            self.metrics.chat_exchanges.labels(outcome=outcome).inc()

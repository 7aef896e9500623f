"""Wizard steps, events and the enumerated answers each step offers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WizardState(str, Enum):
    COLLECT_BUDGET = "collect_budget"
    COLLECT_CONTEXT = "collect_context"
    COLLECT_REASONING = "collect_reasoning"
    COLLECT_VISION = "collect_vision"
    SHOW_RESULTS = "show_results"
    FINISHED = "finished"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in (WizardState.FINISHED, WizardState.CANCELLED)


class WizardAction(str, Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class WizardEvent:
    action: WizardAction
    choice: int = 0
    """Index into the current step's choices; ignored for cancel."""

    @classmethod
    def confirm(cls, choice: int = 0) -> WizardEvent:
        return cls(WizardAction.CONFIRM, choice)

    @classmethod
    def cancel(cls) -> WizardEvent:
        return cls(WizardAction.CANCEL)


@dataclass(frozen=True)
class Choice:
    label: str
    value: float | int | bool


BUDGET_CHOICES = (
    Choice("No budget limit", 0.0),
    Choice("Under $0.50 per 1M tokens", 0.5),
    Choice("Under $1.00 per 1M tokens", 1.0),
    Choice("Under $5.00 per 1M tokens", 5.0),
    Choice("Under $10.00 per 1M tokens", 10.0),
    Choice("Any cost", 1000.0),
)

CONTEXT_CHOICES = (
    Choice("Any context size", 0),
    Choice("At least 32K tokens", 32_000),
    Choice("At least 100K tokens", 100_000),
    Choice("At least 200K tokens", 200_000),
    Choice("At least 400K tokens", 400_000),
)

REASONING_CHOICES = (
    Choice("Yes, I need reasoning capabilities", True),
    Choice("No, reasoning not required", False),
)

VISION_CHOICES = (
    Choice("Yes, I need vision/multimodal", True),
    Choice("No, text-only is fine", False),
)

STEP_CHOICES: dict[WizardState, tuple[Choice, ...]] = {
    WizardState.COLLECT_BUDGET: BUDGET_CHOICES,
    WizardState.COLLECT_CONTEXT: CONTEXT_CHOICES,
    WizardState.COLLECT_REASONING: REASONING_CHOICES,
    WizardState.COLLECT_VISION: VISION_CHOICES,
}

STEP_TITLES: dict[WizardState, str] = {
    WizardState.COLLECT_BUDGET: "What's your budget?",
    WizardState.COLLECT_CONTEXT: "What context size do you need?",
    WizardState.COLLECT_REASONING: "Do you need reasoning capabilities?",
    WizardState.COLLECT_VISION: "Do you need vision/multimodal capabilities?",
    WizardState.SHOW_RESULTS: "Top Recommended Models",
}

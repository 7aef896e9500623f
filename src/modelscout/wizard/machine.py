"""Requirement wizard: a pure transition function and a synchronous driver."""

from __future__ import annotations

import logging
from dataclasses import replace

from modelscout.config import Settings
from modelscout.matching.ranking import Ranking, rank
from modelscout.matching.scoring import score_candidates
from modelscout.matching.types import MatchCandidate, Requirements
from modelscout.observability.metrics import Metrics
from modelscout.wizard.states import STEP_CHOICES, Choice, WizardAction, WizardEvent, WizardState

logger = logging.getLogger("modelscout.wizard")

_NEXT_STATE = {
    WizardState.COLLECT_BUDGET: WizardState.COLLECT_CONTEXT,
    WizardState.COLLECT_CONTEXT: WizardState.COLLECT_REASONING,
    WizardState.COLLECT_REASONING: WizardState.COLLECT_VISION,
    WizardState.COLLECT_VISION: WizardState.SHOW_RESULTS,
    WizardState.SHOW_RESULTS: WizardState.FINISHED,
}

_FIELD = {
    WizardState.COLLECT_BUDGET: "budget",
    WizardState.COLLECT_CONTEXT: "min_context",
    WizardState.COLLECT_REASONING: "reasoning",
    WizardState.COLLECT_VISION: "vision",
}


def transition(
    state: WizardState,
    requirements: Requirements,
    event: WizardEvent,
) -> tuple[WizardState, Requirements]:
    """Consume one event.

    Confirm records the chosen answer and moves one step forward; cancel
    ends the wizard from any live state and drops what was gathered.
    Raises ``ValueError`` on a terminal state or an out-of-range choice.
    """
    if state.terminal:
        raise ValueError(f"Wizard already {state.value}")

    if event.action == WizardAction.CANCEL:
        return WizardState.CANCELLED, Requirements()

    if state == WizardState.SHOW_RESULTS:
        return _NEXT_STATE[state], requirements

    choices = STEP_CHOICES[state]
    if not 0 <= event.choice < len(choices):
        raise ValueError(f"Choice {event.choice} out of range for {state.value} (0-{len(choices) - 1})")

    value = choices[event.choice].value
    return _NEXT_STATE[state], replace(requirements, **{_FIELD[state]: value})


class WizardSession:
    """Drives ``transition`` and scores the catalog on reaching the results.

    Scoring always runs over the full candidate set given at construction,
    never a progressively filtered one.
    """

    def __init__(
        self,
        candidates: list[MatchCandidate],
        settings: Settings,
        metrics: Metrics | None = None,
    ) -> None:
        self._candidates = list(candidates)
        self.settings = settings
        self.metrics = metrics
        self.state = WizardState.COLLECT_BUDGET
        self.requirements = Requirements()
        self.ranking: Ranking | None = None

    @property
    def done(self) -> bool:
        return self.state.terminal

    @property
    def choices(self) -> tuple[Choice, ...]:
        return STEP_CHOICES.get(self.state, ())

    def handle(self, event: WizardEvent) -> WizardState:
        state, requirements = transition(self.state, self.requirements, event)
        logger.debug("Wizard %s -> %s (%s)", self.state.value, state.value, requirements)
        self.state, self.requirements = state, requirements

        if state == WizardState.SHOW_RESULTS:
            self.ranking = rank(score_candidates(self._candidates, requirements, self.settings.wizard_scoring_policy))
        elif state == WizardState.CANCELLED:
            self.ranking = None

        if state.terminal and self.metrics:
            self.metrics.wizard_sessions.labels(outcome=state.value).inc()
        return state

    def preview(self) -> list[MatchCandidate]:
        return self.ranking.top(self.settings.wizard_preview_limit) if self.ranking else []

    def details(self) -> list[MatchCandidate]:
        return self.ranking.top(self.settings.wizard_detail_limit) if self.ranking else []

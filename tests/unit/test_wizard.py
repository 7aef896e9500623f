"""Tests for the requirement wizard state machine."""

import pytest

from modelscout.catalog.types import Model, Provider
from modelscout.config import Settings
from modelscout.matching.types import MatchCandidate, Requirements
from modelscout.wizard.machine import WizardSession, transition
from modelscout.wizard.states import BUDGET_CHOICES, CONTEXT_CHOICES, WizardEvent, WizardState

PROVIDER = Provider(id="p", name="P")


def _candidate(name: str, cost: float, context: int, reason: bool = False, vision: bool = False) -> MatchCandidate:
    model = Model(id=name, name=name, cost_per_1m_in=cost, context_window=context, can_reason=reason, supports_images=vision)
    return MatchCandidate(model=model, provider=PROVIDER)


# budget $1.00, context >= 100K, reasoning yes, vision no
ANSWERS = [WizardEvent.confirm(2), WizardEvent.confirm(2), WizardEvent.confirm(0), WizardEvent.confirm(1)]


@pytest.fixture
def candidates():
    return [
        _candidate("C", cost=0.80, context=32_000),
        _candidate("B", cost=3.00, context=200_000, reason=True, vision=True),
        _candidate("A", cost=0.40, context=128_000, reason=True),
    ]


class TestTransition:
    def test_walks_every_step_in_order(self):
        state, req = WizardState.COLLECT_BUDGET, Requirements()
        seen = []
        for event in ANSWERS:
            state, req = transition(state, req, event)
            seen.append(state)
        assert seen == [
            WizardState.COLLECT_CONTEXT,
            WizardState.COLLECT_REASONING,
            WizardState.COLLECT_VISION,
            WizardState.SHOW_RESULTS,
        ]
        assert req == Requirements(budget=1.0, min_context=100_000, reasoning=True, vision=False)

    def test_each_step_sets_only_its_field(self):
        _, req = transition(WizardState.COLLECT_CONTEXT, Requirements(budget=5.0), WizardEvent.confirm(4))
        assert req == Requirements(budget=5.0, min_context=400_000)

    def test_confirm_on_results_finishes(self):
        req = Requirements(budget=1.0)
        assert transition(WizardState.SHOW_RESULTS, req, WizardEvent.confirm()) == (WizardState.FINISHED, req)

    @pytest.mark.parametrize("state", [s for s in WizardState if not s.terminal])
    def test_cancel_from_any_live_state(self, state):
        result = transition(state, Requirements(budget=1.0, vision=True), WizardEvent.cancel())
        assert result == (WizardState.CANCELLED, Requirements())

    @pytest.mark.parametrize("state", [WizardState.FINISHED, WizardState.CANCELLED])
    def test_terminal_states_reject_events(self, state):
        with pytest.raises(ValueError):
            transition(state, Requirements(), WizardEvent.confirm())

    def test_out_of_range_choice(self):
        with pytest.raises(ValueError):
            transition(WizardState.COLLECT_BUDGET, Requirements(), WizardEvent.confirm(len(BUDGET_CHOICES)))
        with pytest.raises(ValueError):
            transition(WizardState.COLLECT_CONTEXT, Requirements(), WizardEvent.confirm(-1))

    def test_choice_values(self):
        assert [c.value for c in BUDGET_CHOICES] == [0.0, 0.5, 1.0, 5.0, 10.0, 1000.0]
        assert [c.value for c in CONTEXT_CHOICES] == [0, 32_000, 100_000, 200_000, 400_000]


class TestSession:
    def test_full_run_ranks_by_requirements(self, candidates):
        session = WizardSession(candidates, Settings())
        for event in ANSWERS:
            session.handle(event)

        assert session.state == WizardState.SHOW_RESULTS
        top = session.details()
        assert [c.model.id for c in top] == ["A", "B", "C"]
        assert [c.score for c in top] == [175.0, 45.0, 0.0]
        assert top[0].reasons == ("Well under budget", "Meets context requirement", "Has reasoning")
        assert top[1].reasons == ("Over budget", "Meets context requirement", "Has reasoning")
        assert top[2].reasons == ("Below context requirement", "No reasoning")

        assert session.handle(WizardEvent.confirm()) == WizardState.FINISHED
        assert session.done

    def test_scores_full_candidate_set(self, candidates):
        # over-budget and short-context models are scored, not dropped
        session = WizardSession(candidates, Settings())
        for event in ANSWERS:
            session.handle(event)
        assert len(session.ranking) == 3

    def test_preview_and_detail_limits(self, candidates):
        session = WizardSession(candidates, Settings(wizard_preview_limit=2, wizard_detail_limit=1))
        assert session.preview() == []
        for event in ANSWERS:
            session.handle(event)
        assert len(session.preview()) == 2
        assert len(session.details()) == 1

    def test_cancel_clears_results(self, candidates, metrics, registry):
        session = WizardSession(candidates, Settings(), metrics=metrics)
        session.handle(WizardEvent.confirm(1))
        session.handle(WizardEvent.cancel())
        assert session.state == WizardState.CANCELLED
        assert session.requirements == Requirements()
        assert session.ranking is None
        assert session.choices == ()
        assert registry.get_sample_value("modelscout_wizard_sessions_total", {"outcome": "cancelled"}) == 1.0

    def test_choices_follow_state(self, candidates):
        session = WizardSession(candidates, Settings())
        assert session.choices == BUDGET_CHOICES
        session.handle(WizardEvent.confirm(0))
        assert session.choices == CONTEXT_CHOICES

"""Stable ordering of scored candidates."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from modelscout.matching.types import MatchCandidate


class Ranking(Sequence[MatchCandidate]):
    """Candidates ordered by descending score, ties in their input order.

    The full list is kept; ``top(n)`` is only a view for display.
    """

    def __init__(self, candidates: list[MatchCandidate]) -> None:
        # sorted() is stable, including with reverse=True
        self._ranked = tuple(sorted(candidates, key=lambda c: c.score, reverse=True))

    def top(self, n: int) -> list[MatchCandidate]:
        if n <= 0:
            return []
        return list(self._ranked[:n])

    def __getitem__(self, index):  # type: ignore[override]
        return self._ranked[index]

    def __len__(self) -> int:
        return len(self._ranked)

    def __iter__(self) -> Iterator[MatchCandidate]:
        return iter(self._ranked)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Ranking):
            return self._ranked == other._ranked
        return NotImplemented

    def __repr__(self) -> str:
        return f"Ranking({len(self._ranked)} candidates)"


def rank(candidates: list[MatchCandidate]) -> Ranking:
    return Ranking(candidates)

"""Per-player score vectors and best-candidate selection.

A ScoreVector holds one non-negative score per player plus the depth at
which the value was determined. Players are compared through the
"calculated score": a player's score over the sum of everyone else's,
which generalizes the zero-sum comparison of two-player minimax to any
number of players.

Usage (example):

    from adversary.core.score import ScoreVector, select_best

    a = ScoreVector.from_scores([3, 1])
    b = ScoreVector.from_scores([1, 5])
    select_best([a, b], player=0)   # -> 0
"""
from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence, Tuple

NO_INDEX = -1


class ScoreVector:
    def __init__(self, player_count: int):
        self._scores: List[float] = [0.0] * max(0, player_count)
        self._depth = 0

    @classmethod
    def from_scores(cls, scores: Sequence[float]) -> "ScoreVector":
        """Build a vector from raw scores; negatives are clamped to 0."""
        vec = cls(len(scores))
        for i, s in enumerate(scores):
            vec.set_score(i, s)
        return vec

    @classmethod
    def weighted_sum(cls, vectors: Sequence["ScoreVector"]) -> "ScoreVector":
        """Element-wise sum of already weighted vectors.

        The depth tag of the result is left at 0.
        """
        if not vectors:
            return cls(0)
        total = cls(vectors[0].player_count)
        for i in range(total.player_count):
            total._scores[i] = sum(v._scores[i] for v in vectors)
        return total

    # ── Accessors ──────────────────────────────────────────────────────────

    @property
    def player_count(self) -> int:
        return len(self._scores)

    @property
    def scores(self) -> Tuple[float, ...]:
        return tuple(self._scores)

    @property
    def depth(self) -> int:
        return self._depth

    @depth.setter
    def depth(self, depth: int):
        self._depth = depth

    def _legal_player(self, player: int) -> bool:
        return 0 <= player < len(self._scores)

    def score(self, player: int) -> float:
        """Raw score of `player`, NaN if the index is out of range."""
        if not self._legal_player(player):
            return math.nan
        return self._scores[player]

    def calculated_score(self, player: int) -> float:
        """Score of `player` over the sum of all other players' scores.

        Falls back to the raw score when nobody else has points, and
        returns 0 for an out-of-range index.
        """
        if not self._legal_player(player):
            return 0.0
        others = sum(s for i, s in enumerate(self._scores) if i != player)
        if others == 0:
            return self._scores[player]
        return self._scores[player] / others

    # ── Mutators (all clamp at 0, ignore bad indices) ──────────────────────

    def set_score(self, player: int, value: float):
        if self._legal_player(player):
            self._scores[player] = max(0.0, float(value))

    def change_score(self, player: int, delta: float):
        if self._legal_player(player):
            self.set_score(player, self._scores[player] + delta)

    def adjust_score(self, player: int, multiplier: float):
        if self._legal_player(player):
            self.set_score(player, self._scores[player] * multiplier)

    def scale(self, weight: float):
        """Multiply every score by `weight` (chance-node weighting)."""
        for i in range(len(self._scores)):
            self.set_score(i, self._scores[i] * weight)

    def __len__(self) -> int:
        return len(self._scores)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScoreVector):
            return NotImplemented
        return self._scores == other._scores and self._depth == other._depth

    def __repr__(self) -> str:
        return f"ScoreVector(scores={self._scores}, depth={self._depth})"


def select_best(vectors: Sequence[ScoreVector], player: int,
                rng: Optional[random.Random] = None) -> int:
    """Index of the vector that is best for `player`, or -1 if none.

    Candidates are ranked by calculated score using exact equality for
    ties. When the tied candidates come from different depths, only the
    shallowest ones are kept. Any remaining tie is broken uniformly at
    random with `rng` (the module-level generator when omitted).
    """
    if not vectors:
        return NO_INDEX
    if len(vectors) == 1:
        return 0

    different_depths = False
    uniform_depth = vectors[0].depth
    best = vectors[0].calculated_score(player)
    indexes = [0]
    for i in range(1, len(vectors)):
        test = vectors[i].calculated_score(player)
        if vectors[i].depth != uniform_depth:
            different_depths = True
        if test == best:
            indexes.append(i)
        elif test > best:
            best = test
            indexes = [i]

    if different_depths:
        best_depth = min(vectors[i].depth for i in indexes)
        indexes = [i for i in indexes if vectors[i].depth == best_depth]

    if len(indexes) == 1:
        return indexes[0]
    source = rng if rng is not None else random
    return indexes[source.randrange(len(indexes))]

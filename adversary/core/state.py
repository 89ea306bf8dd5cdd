"""Abstract game states and actions, and the recursive expectiminimax evaluator.

A concrete game subclasses GameState and fills in four hooks:

- possible_actions(): legal moves, or the outcomes of a random event.
  An empty list (or None) marks a terminal position.
- evaluate(): a ScoreVector with one entry per player.
- turn(): index of the player about to act, or CHANCE (-1) when a random
  event decides the next state.
- apply_action(action): a NEW state; the receiver must not be modified.

Everything else (depth bookkeeping, recording the incoming action, and
value propagation) is handled here.
"""
from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from adversary.core.score import ScoreVector, select_best

CHANCE = -1


class Action(ABC):
    """A move, or one outcome of a random event."""

    def probability(self) -> float:
        """Chance of this outcome occurring. Only read at chance nodes."""
        return 1.0


class GameState(ABC):
    depth: int = 0
    action: Optional[Action] = None

    # ── Game-specific hooks ────────────────────────────────────────────────

    @abstractmethod
    def possible_actions(self) -> Optional[Sequence[Action]]:
        ...

    @abstractmethod
    def evaluate(self) -> ScoreVector:
        ...

    @abstractmethod
    def turn(self) -> int:
        ...

    @abstractmethod
    def apply_action(self, action: Action) -> "GameState":
        ...

    # ── Search ─────────────────────────────────────────────────────────────

    def expand(self, actions: Optional[Sequence[Action]]) -> List["GameState"]:
        """Apply every action and stamp each child with its action and depth."""
        if not actions:
            return []
        children = []
        for action in actions:
            child = self.apply_action(action)
            child.action = action
            child.depth = self.depth + 1
            children.append(child)
        return children

    def evaluate_to_depth(self, max_depth: int,
                          rng: Optional[random.Random] = None) -> ScoreVector:
        """Value of this state, expanding the tree down to `max_depth`.

        Turn nodes return the child value that is best for the acting
        player, keeping that child's depth tag. Chance nodes return the
        probability-weighted sum of the child values, whose depth tag is 0.
        """
        if self.depth >= max_depth:
            return self._leaf_value()

        actions = self.possible_actions()
        children = self.expand(actions)
        if not children:
            return self._leaf_value()

        values = [child.evaluate_to_depth(max_depth, rng) for child in children]

        turn = self.turn()
        if turn >= 0:
            return values[select_best(values, turn, rng)]

        for value, action in zip(values, actions):
            value.scale(action.probability())
        return ScoreVector.weighted_sum(values)

    def _leaf_value(self) -> ScoreVector:
        value = self.evaluate()
        value.depth = self.depth
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(turn={self.turn()}, depth={self.depth})"

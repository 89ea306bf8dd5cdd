"""Two-player dice race with chance nodes.

Each turn the mover first rolls a die (a chance node), then chooses to
advance by the roll or by half of it (rounded up). Landing exactly on the
goal wins; overshooting bounces back by the excess. A position is scored
by how close each player is to the goal.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from adversary.core.score import ScoreVector
from adversary.core.state import Action, GameState


@dataclass(frozen=True)
class Roll(Action):
    pips: int
    sides: int = 6

    def probability(self) -> float:
        return 1.0 / self.sides

    def __str__(self):
        return f"roll {self.pips}"


@dataclass(frozen=True)
class Advance(Action):
    steps: int

    def __str__(self):
        return f"advance {self.steps}"


class DiceRaceState(GameState):
    def __init__(self, positions: Tuple[int, int] = (0, 0), goal: int = 10, to_move: int = 0,
                 roll: Optional[int] = None, sides: int = 6):
        self.positions = tuple(positions)
        self.goal = goal
        self.to_move = to_move
        self.roll = roll
        self.sides = sides

    def winner(self) -> int:
        for player, pos in enumerate(self.positions):
            if pos == self.goal:
                return player
        return -1

    def possible_actions(self) -> List[Action]:
        if self.winner() >= 0:
            return []
        if self.roll is None:
            return [Roll(n, self.sides) for n in range(1, self.sides + 1)]
        return sorted({Advance(self.roll), Advance((self.roll + 1) // 2)}, key=lambda a: -a.steps)

    def turn(self) -> int:
        return -1 if self.roll is None else self.to_move

    def apply_action(self, action: Action) -> "DiceRaceState":
        if isinstance(action, Roll):
            return DiceRaceState(self.positions, self.goal, self.to_move, action.pips, self.sides)
        target = self.positions[self.to_move] + action.steps
        if target > self.goal:
            target = max(0, 2 * self.goal - target)
        positions = list(self.positions)
        positions[self.to_move] = target
        return DiceRaceState(tuple(positions), self.goal, 1 - self.to_move, None, self.sides)

    def evaluate(self) -> ScoreVector:
        winner = self.winner()
        if winner >= 0:
            value = ScoreVector(len(self.positions))
            value.set_score(winner, 1)
            return value
        return ScoreVector.from_scores([pos / self.goal for pos in self.positions])

"""N-player Nim: players take 1..max_take stones in turn, taking the last stone wins."""

from dataclasses import dataclass
from typing import List

from adversary.core.score import ScoreVector
from adversary.core.state import Action, GameState


@dataclass(frozen=True)
class Take(Action):
    stones: int

    def __str__(self):
        return f"take {self.stones}"


class NimState(GameState):
    def __init__(self, stones: int, players: int = 2, to_move: int = 0, max_take: int = 3,
                 last_mover: int = -1):
        self.stones = stones
        self.players = players
        self.to_move = to_move
        self.max_take = max_take
        self.last_mover = last_mover

    def possible_actions(self) -> List[Take]:
        return [Take(n) for n in range(1, min(self.max_take, self.stones) + 1)]

    def turn(self) -> int:
        return self.to_move

    def apply_action(self, action: Take) -> "NimState":
        return NimState(
            self.stones - action.stones,
            players=self.players,
            to_move=(self.to_move + 1) % self.players,
            max_take=self.max_take,
            last_mover=self.to_move,
        )

    def evaluate(self) -> ScoreVector:
        value = ScoreVector(self.players)
        if self.stones == 0:
            value.set_score(self.last_mover, 1)
        else:
            # undecided: everyone equally placed
            for p in range(self.players):
                value.set_score(p, 1)
        return value

import random
from typing import Optional

from adversary.core.search import SearchEngine
from adversary.core.state import Action, GameState


class Engine:
    """Keeps a current game state and plays the search's choice for whoever is to move."""

    def __init__(self, state: GameState, depth: Optional[int] = None, **engine_kwargs):
        self.state = state
        self.search = SearchEngine(depth=depth, **engine_kwargs)
        self.history = []

    def get_best_action(self) -> Optional[Action]:
        player = self.state.turn()
        if player < 0:
            return None  # a random event decides, not a player
        return self.search.choose_action(self.state, player)

    def make_action(self, action: Action):
        actions = self.state.possible_actions() or []
        if action not in actions:
            raise ValueError(f"Illegal action: {action}")
        self.state = self.state.apply_action(action)
        self.history.append(action)

    def resolve_chance(self, rng: Optional[random.Random] = None) -> Optional[Action]:
        """Sample an outcome at a chance node by probability() and play it."""
        if self.state.turn() >= 0:
            return None
        actions = self.state.possible_actions()
        if not actions:
            return None
        source = rng or self.search.rng or random
        action = source.choices(actions, weights=[a.probability() for a in actions])[0]
        self.make_action(action)
        return action

    def play_best(self) -> Optional[Action]:
        """Play the search's move, or roll the dice when no player is to move."""
        if self.state.turn() < 0:
            return self.resolve_chance()
        action = self.get_best_action()
        if action is not None:
            self.make_action(action)
        return action

    def is_game_over(self) -> bool:
        return not self.state.possible_actions()

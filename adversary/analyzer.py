# adversary/analyzer.py
import random
from dataclasses import dataclass
from typing import List, Optional

from adversary.core.score import ScoreVector, select_best
from adversary.core.state import Action, GameState


@dataclass
class ActionReport:
    action: Action
    value: ScoreVector
    calculated_score: float
    depth: int
    rank: int = 0
    gap: float = 0.0  # best calculated score minus this one


class Analyzer:
    """Values every root action instead of just the winner.

    Useful for showing players how their move compared with the best one.
    """

    def __init__(self, depth: int = 2, rng: Optional[random.Random] = None):
        self.depth = max(1, depth)
        self.rng = rng

    def analyze(self, root: GameState, player: int) -> List[ActionReport]:
        """One report per legal action, best first. Ranks follow select_best on ties."""
        actions = root.possible_actions()
        if not actions:
            return []
        children = root.expand(actions)
        horizon = root.depth + self.depth
        values = [child.evaluate_to_depth(horizon, self.rng) for child in children]

        reports = [
            ActionReport(child.action, value, value.calculated_score(player), value.depth)
            for child, value in zip(children, values)
        ]
        best = reports[select_best(values, player, self.rng)]
        rest = sorted((r for r in reports if r is not best),
                      key=lambda r: (-r.calculated_score, r.depth))
        ordered = [best] + rest
        for i, report in enumerate(ordered):
            report.rank = i + 1
            report.gap = best.calculated_score - report.calculated_score
        return ordered

    def classify(self, root: GameState, player: int, action: Action) -> Optional[ActionReport]:
        """Report for `action`, or None if it is not legal from `root`."""
        for report in self.analyze(root, player):
            if report.action == action:
                return report
        return None

"""Generic expectiminimax search for N-player games with chance nodes."""

from adversary.core import CHANCE, Action, GameState, ScoreVector, SearchEngine, choose_action, select_best

__all__ = [
    "Action",
    "CHANCE",
    "GameState",
    "ScoreVector",
    "SearchEngine",
    "choose_action",
    "select_best",
]

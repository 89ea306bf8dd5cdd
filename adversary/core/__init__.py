"""Core search components: score vectors, game states and the search engine."""

from .score import ScoreVector, select_best
from .state import CHANCE, Action, GameState
from .search import SearchEngine, choose_action

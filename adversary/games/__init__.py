"""Sample games implementing the GameState hooks."""

from .chess_game import ChessAction, ChessState
from .dice_race import Advance, DiceRaceState, Roll
from .nim import NimState, Take

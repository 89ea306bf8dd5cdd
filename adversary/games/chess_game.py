"""Chess as an adversary game, backed by python-chess.

Player 0 is White, player 1 is Black. Each side's score is its material
on the board; a checkmated side scores 0 and the winner gets a mate
bonus on top of its material. Draws give both sides the same score.
"""

from dataclasses import dataclass
from typing import List, Optional

import chess

from adversary.config import CONFIG
from adversary.core.score import ScoreVector
from adversary.core.state import Action, GameState

WHITE_PLAYER = 0
BLACK_PLAYER = 1


@dataclass(frozen=True)
class ChessAction(Action):
    move: chess.Move

    def uci(self) -> str:
        return self.move.uci()

    def __str__(self):
        return self.move.uci()


class ChessState(GameState):
    def __init__(self, board: Optional[chess.Board] = None, fen: Optional[str] = None):
        """Wrap a board (copied) or a FEN, defaulting to the starting position."""
        if board is not None:
            self.board = board.copy()
        else:
            self.board = chess.Board(fen) if fen else chess.Board()
        self.cfg = CONFIG.eval

    def possible_actions(self) -> List[ChessAction]:
        if self.board.is_game_over(claim_draw=False):
            return []
        return [ChessAction(m) for m in self.board.legal_moves]

    def turn(self) -> int:
        return WHITE_PLAYER if self.board.turn == chess.WHITE else BLACK_PLAYER

    def apply_action(self, action: ChessAction) -> "ChessState":
        child = ChessState(self.board)
        child.board.push(action.move)
        return child

    def evaluate(self) -> ScoreVector:
        board = self.board
        if board.is_checkmate():
            # side to move is mated
            winner = BLACK_PLAYER if board.turn == chess.WHITE else WHITE_PLAYER
            value = ScoreVector(2)
            value.set_score(winner, self.material(not board.turn) + self.cfg.mate_bonus)
            return value
        if board.is_stalemate() or board.is_insufficient_material() \
                or board.is_fivefold_repetition() or board.is_seventyfive_moves():
            return ScoreVector.from_scores([self.cfg.draw_score, self.cfg.draw_score])
        return ScoreVector.from_scores([
            self.material(chess.WHITE),
            self.material(chess.BLACK),
        ])

    def material(self, color: chess.Color) -> int:
        total = 0
        for name, value in self.cfg.piece_values.items():
            piece_type = chess.PIECE_NAMES.index(name.lower())
            total += len(self.board.pieces(piece_type, color)) * value
        return total

"""
Integration test suite for the adversary search engine.

Tests components working together end-to-end on the bundled games:
- Chess through python-chess (mates, captures, terminal positions)
- N-player Nim (exact game-theoretic answers)
- Dice race (chance nodes and expected values)
- Engine wrapper full games
- Analyzer ranking
- Progress logging observer
"""

import logging
import random

import chess
import pytest

from adversary.analyzer import Analyzer
from adversary.core.search import SearchEngine, choose_action
from adversary.core.utils import log_progress
from adversary.games import Advance, ChessAction, ChessState, DiceRaceState, NimState, Roll, Take
from adversary.main import Engine

# ════════════════════════════════════════════════════════════════════════════
#  CHESS
# ════════════════════════════════════════════════════════════════════════════


class TestChess:
    def test_finds_back_rank_mate(self):
        state = ChessState(fen="6k1/5ppp/8/8/8/8/8/R3K3 w - - 0 1")
        action = choose_action(state, 0, 1)
        assert action == ChessAction(chess.Move.from_uci("a1a8"))

    def test_captures_hanging_knight(self):
        state = ChessState(fen="4k3/8/5n2/8/3B4/8/8/4K3 w - - 0 1")
        action = choose_action(state, 0, 2, rng=random.Random(3))
        assert action.uci() == "d4f6"

    def test_black_to_move_is_player_one(self):
        state = ChessState(fen="4k3/8/8/8/8/8/8/4K3 b - - 0 1")
        assert state.turn() == 1

    def test_checkmate_returns_none(self):
        state = ChessState(fen="rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 0 1")
        assert state.board.is_checkmate()
        assert choose_action(state, 0, 2) is None

    def test_stalemate_returns_none(self):
        state = ChessState(fen="5k2/5P2/5K2/8/8/8/8/8 b - - 0 1")
        assert choose_action(state, 1, 2) is None

    def test_mate_scores_winner_only(self):
        board = chess.Board("6k1/5ppp/8/8/8/8/8/R3K3 w - - 0 1")
        board.push_uci("a1a8")
        value = ChessState(board).evaluate()
        assert value.score(1) == 0
        assert value.score(0) > 100000

    def test_draw_scores_equal(self):
        value = ChessState(fen="4k3/8/8/8/8/8/8/4K3 w - - 0 1").evaluate()
        assert value.score(0) == value.score(1)

    def test_apply_action_does_not_mutate(self):
        state = ChessState()
        fen = state.board.fen()
        child = state.apply_action(ChessAction(chess.Move.from_uci("e2e4")))
        assert state.board.fen() == fen
        assert child.board.fen() != fen

    def test_opening_move_is_legal(self):
        state = ChessState()
        action = choose_action(state, 0, 2, rng=random.Random(0))
        assert action.move in state.board.legal_moves

    def test_only_one_legal_move(self):
        state = ChessState(fen="4k3/8/8/8/8/8/4r3/4K3 w - - 0 1")
        legal = list(state.board.legal_moves)
        action = choose_action(state, 0, 3)
        assert action.move in legal


# ════════════════════════════════════════════════════════════════════════════
#  NIM
# ════════════════════════════════════════════════════════════════════════════


class TestNim:
    def test_two_player_winning_move(self):
        assert choose_action(NimState(5), 0, 5) == Take(1)

    def test_take_all_when_possible(self):
        assert choose_action(NimState(3, players=3), 0, 3) == Take(3)

    def test_terminal(self):
        assert choose_action(NimState(0), 0, 3) is None

    def test_forced_move(self):
        assert choose_action(NimState(1), 1, 3) == Take(1)

    def test_engine_plays_to_the_end(self):
        engine = Engine(NimState(9, players=3), depth=4, rng=random.Random(5))
        while not engine.is_game_over():
            assert engine.play_best() is not None
        assert engine.state.stones == 0
        assert sum(a.stones for a in engine.history) == 9


# ════════════════════════════════════════════════════════════════════════════
#  DICE RACE (CHANCE NODES)
# ════════════════════════════════════════════════════════════════════════════


class TestDiceRace:
    def test_roll_probabilities(self):
        state = DiceRaceState()
        actions = state.possible_actions()
        assert state.turn() == -1
        assert len(actions) == 6
        assert sum(a.probability() for a in actions) == pytest.approx(1.0)

    def test_takes_exact_win(self):
        state = DiceRaceState(positions=(7, 0), roll=3)
        assert choose_action(state, 0, 1) == Advance(3)

    def test_bounce_back(self):
        state = DiceRaceState(positions=(9, 0), roll=4)
        child = state.apply_action(Advance(4))
        assert child.positions == (7, 0)
        assert child.turn() == -1
        assert child.to_move == 1

    def test_bounce_never_below_start(self):
        state = DiceRaceState(positions=(1, 0), goal=2, roll=6)
        child = state.apply_action(Advance(6))
        assert child.positions == (0, 0)

    def test_expected_value_over_rolls(self):
        state = DiceRaceState(positions=(9, 0))
        value = state.evaluate_to_depth(2)
        assert value.score(0) == pytest.approx(0.9)
        assert value.score(1) == 0
        assert value.depth == 0

    def test_resolve_chance_samples_roll(self):
        engine = Engine(DiceRaceState(), depth=2)
        action = engine.resolve_chance(random.Random(4))
        assert isinstance(action, Roll)
        assert engine.history == [action]
        assert engine.state.roll == action.pips
        assert engine.state.turn() == 0

    def test_resolve_chance_at_turn_node(self):
        engine = Engine(DiceRaceState(roll=3), depth=2)
        assert engine.resolve_chance(random.Random(4)) is None
        assert engine.history == []

    def test_resolve_chance_follows_probability(self):
        class Never(Roll):
            def probability(self):
                return 0.0

        rng = random.Random(0)
        for _ in range(20):
            engine = Engine(DiceRaceState(), depth=1)
            engine.state.possible_actions = lambda: [Never(1), Roll(2)]
            assert engine.resolve_chance(rng) == Roll(2)

    def test_engine_declines_chance_turn(self):
        engine = Engine(DiceRaceState(), depth=2)
        assert engine.get_best_action() is None

    def test_full_game(self):
        rng = random.Random(11)
        engine = Engine(DiceRaceState(goal=8), depth=2, rng=rng)
        for _ in range(500):
            if engine.is_game_over():
                break
            assert engine.play_best() is not None
        assert engine.is_game_over()
        assert engine.state.winner() in (0, 1)


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE WRAPPER
# ════════════════════════════════════════════════════════════════════════════


class TestEngineWrapper:
    def test_illegal_action_rejected(self):
        engine = Engine(NimState(5), depth=3)
        with pytest.raises(ValueError):
            engine.make_action(Take(4))
        assert engine.state.stones == 5

    def test_make_action_records_history(self):
        engine = Engine(NimState(5), depth=3)
        engine.make_action(Take(2))
        assert engine.state.stones == 3
        assert engine.history == [Take(2)]

    def test_best_action_for_side_to_move(self):
        engine = Engine(ChessState(fen="6k1/5ppp/8/8/8/8/8/R3K3 w - - 0 1"), depth=1)
        assert engine.get_best_action().uci() == "a1a8"

    def test_chess_moves_stay_legal(self):
        engine = Engine(ChessState(), depth=1, rng=random.Random(2))
        for _ in range(6):
            board = engine.state.board
            action = engine.get_best_action()
            assert action.move in board.legal_moves
            engine.make_action(action)
        assert len(engine.history) == 6


# ════════════════════════════════════════════════════════════════════════════
#  ANALYZER
# ════════════════════════════════════════════════════════════════════════════


class TestAnalyzer:
    def test_ranks_best_first(self):
        reports = Analyzer(depth=5).analyze(NimState(5), 0)
        assert [r.rank for r in reports] == [1, 2, 3]
        assert reports[0].action == Take(1)
        assert reports[0].gap == 0
        assert all(r.gap == 1 for r in reports[1:])

    def test_classify(self):
        analyzer = Analyzer(depth=5)
        report = analyzer.classify(NimState(5), 0, Take(2))
        assert report.calculated_score == 0
        assert report.gap == 1

    def test_classify_illegal(self):
        assert Analyzer(depth=2).classify(NimState(2), 0, Take(3)) is None

    def test_terminal_root(self):
        assert Analyzer().analyze(NimState(0), 0) == []

    def test_agrees_with_search(self):
        state = ChessState(fen="4k3/8/5n2/8/3B4/8/8/4K3 w - - 0 1")
        reports = Analyzer(depth=2, rng=random.Random(1)).analyze(state, 0)
        assert reports[0].action.uci() == "d4f6"


# ════════════════════════════════════════════════════════════════════════════
#  PROGRESS LOGGING
# ════════════════════════════════════════════════════════════════════════════


class TestProgressLogging:
    def test_log_progress_observer(self, caplog):
        caplog.set_level(logging.INFO, logger="adversary.core.utils")
        engine = SearchEngine(depth=5, observer=log_progress)
        assert engine.choose_action(NimState(5), 0) == Take(1)
        lines = [r.getMessage() for r in caplog.records if r.name == "adversary.core.utils"]
        assert len(lines) == 3
        assert lines[0].startswith("info branch 1/3 action take 1 score 1.0000")

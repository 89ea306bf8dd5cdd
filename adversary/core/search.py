import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from adversary.config import CONFIG
from adversary.core.score import ScoreVector, select_best
from adversary.core.state import Action, GameState
from adversary.core.utils import log_progress

logger = logging.getLogger(__name__)

# observer(index, total, action, calculated_score, depth)
Observer = Callable[[int, int, Action, float, int], None]


def choose_action(root: Optional[GameState], player_index: int, depth_budget: int,
                  rng: Optional[random.Random] = None,
                  observer: Optional[Observer] = None,
                  workers: int = 1) -> Optional[Action]:
    """Best action for `player_index` from `root`, searching `depth_budget` plies.

    Returns None when there is no root or no legal action. A forced move
    (exactly one action) is returned without searching.
    """
    if root is None:
        return None
    if depth_budget <= 0:
        depth_budget = 1

    actions = root.possible_actions()
    if not actions:
        return None
    if len(actions) == 1:
        return actions[0]

    children = root.expand(actions)
    horizon = root.depth + depth_budget
    logger.debug("searching %d branches for player %d to depth %d",
                 len(children), player_index, depth_budget)

    values = _evaluate_children(children, horizon, rng, workers)
    for i, (child, value) in enumerate(zip(children, values)):
        if observer:
            observer(i + 1, len(children), child.action,
                     value.calculated_score(player_index), value.depth)

    best = select_best(values, player_index, rng)
    return children[best].action


def _evaluate_children(children: List[GameState], horizon: int,
                       rng: Optional[random.Random], workers: int) -> List[ScoreVector]:
    if workers <= 1:
        return [child.evaluate_to_depth(horizon, rng) for child in children]
    # Siblings share nothing, so each subtree can be valued independently.
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda child: child.evaluate_to_depth(horizon, rng), children))


class SearchEngine:
    def __init__(self, depth: Optional[int] = None, rng: Optional[random.Random] = None,
                 observer: Optional[Observer] = None, workers: Optional[int] = None):
        cfg = CONFIG.search
        self.max_depth = depth if depth is not None else cfg.depth
        if rng is None and cfg.seed is not None:
            rng = random.Random(cfg.seed)
        self.rng = rng
        if observer is None and cfg.report_progress:
            observer = log_progress
        self.observer = observer
        self.workers = workers or cfg.workers

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def choose_action(self, root: Optional[GameState], player_index: int,
                      depth: Optional[int] = None) -> Optional[Action]:
        return choose_action(root, player_index, depth if depth is not None else self.max_depth,
                             rng=self.rng, observer=self.observer, workers=self.workers)

    def start_search(self, root: GameState, player_index: int, depth: Optional[int] = None,
                     callback: Optional[Callable[[Optional[Action], int], None]] = None):
        """Iterative deepening on a background thread.

        `callback(action, d)` fires after each completed depth and once more
        with d == -1 when the search ends. stop() takes effect between depths.
        """
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        target_depth = max(1, depth if depth is not None else self.max_depth)

        def worker():
            best = None
            for d in range(1, target_depth + 1):
                if self._stop_event.is_set():
                    break
                best = self.choose_action(root, player_index, d)
                if callback:
                    callback(best, d)
                if best is None:
                    break
            if callback:
                callback(best, -1)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def stop(self):
        self._stop_event.set()
        # may be called from a callback running on the search thread
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=0.2)

    def wait(self, timeout: Optional[float] = None):
        if self._thread:
            self._thread.join(timeout=timeout)

# adversary/config.py
import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Material per piece for the chess adapter (centipawns)
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 320,
    "BISHOP": 330,
    "ROOK": 500,
    "QUEEN": 900,
}

@dataclass
class SearchConfig:
    depth: int = 3
    seed: Optional[int] = None  # None means unseeded tie-breaks
    workers: int = 1  # >1 evaluates root branches on a thread pool
    report_progress: bool = False

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    mate_bonus: int = 100000
    draw_score: int = 1  # both sides get this on a drawn position

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "adversary.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval"):
            for k, v in raw.get(section, {}).items():
                target = getattr(cfg, section)
                if hasattr(target, k):
                    setattr(target, k, v)
                else:
                    logger.warning("ignoring unknown config key %s.%s", section, k)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg


def configure_logging(level: Optional[str] = None):
    level = (level or CONFIG.log_level).upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("adversary").setLevel(level)


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("ADVERSARY_CONFIG_TOML", "adversary.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("ADVERSARY_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        logger.warning("ADVERSARY_SEARCH_DEPTH=%r is not an integer", override_depth)

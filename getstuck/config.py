# getstuck/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import logging
import os
import tomllib  # python >=3.11

logger = logging.getLogger(__name__)

# Difficulty tiers (search depth). A caller convention, the engine only sees depths.
DIFFICULTIES = {
    "easy": 1,
    "intermediate": 3,
    "hard": 8,
    "extreme": 12,
}

@dataclass
class SearchConfig:
    depth: int = 2
    strategy: str = "auto"  # "auto" | "fixed" | "iterative"
    iterative_threshold: int = 8  # auto switches to iterative deepening above this depth
    time_limit_ms: int = 2000
    tt_max_entries: int = 500_000
    use_pruning: bool = True
    use_cache: bool = True

@dataclass
class EvalConfig:
    material_weight: float = 1.0
    opponent_material_weight: float = 0.0
    mobility_weight: float = 0.0

@dataclass
class GameConfig:
    max_deal_attempts: int = 100
    seed: Optional[int] = None

@dataclass
class UIConfig:
    engine_name: str = "GetStuck"
    api_port: int = 8000
    difficulties: Dict[str, int] = field(default_factory=lambda: DIFFICULTIES.copy())

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    game: GameConfig = field(default_factory=GameConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "game", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
                else:
                    logger.warning("Ignoring unknown config key %s.%s", section, k)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg

    def depth_for(self, difficulty: str) -> int:
        """Map a difficulty name (or a plain number) to a search depth."""
        key = difficulty.strip().lower()
        if key in self.ui.difficulties:
            return self.ui.difficulties[key]
        try:
            return int(key)
        except ValueError:
            raise ValueError(f"Unknown difficulty: {difficulty!r}") from None

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("GETSTUCK_CONFIG_TOML", "config.toml"))
# env overrides for quick debugging
override_depth = os.environ.get("GETSTUCK_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        logger.warning("Ignoring non-integer GETSTUCK_SEARCH_DEPTH=%r", override_depth)
if os.environ.get("GETSTUCK_LOG_LEVEL"):
    CONFIG.log_level = os.environ["GETSTUCK_LOG_LEVEL"]

# -*- coding: utf-8 -*-
"""
Centralised Configuration for the Fuzzy ARAS Pipeline
=====================================================

All configurable parameters are defined here as typed dataclasses.
The master ``Config`` class composes every sub-config and provides
serialisation, summary printing, and global singleton management.

Configuration Groups
--------------------
- PathConfig         : directory structure
- ProblemConfig      : dimension bounds, default term codes, label prefixes
- AggregationConfig  : geometric-mean epsilon for expert aggregation
- OutputConfig       : which artefacts to export and how
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
from enum import Enum
import json


# =========================================================================
# Path Configuration
# =========================================================================

@dataclass
class PathConfig:
    """File and directory paths, all derived from *base_dir*."""
    base_dir: Path = field(default_factory=lambda: Path.cwd())
    output_name: str = "result"

    @property
    def output_dir(self) -> Path:
        return Path(self.base_dir) / self.output_name

    @property
    def results_dir(self) -> Path:
        return self.output_dir / "results"

    @property
    def logs_dir(self) -> Path:
        return self.output_dir / "logs"

    def ensure_directories(self) -> None:
        """Create every output directory if missing."""
        for d in [self.output_dir, self.results_dir, self.logs_dir]:
            d.mkdir(parents=True, exist_ok=True)


# =========================================================================
# Problem Configuration
# =========================================================================

@dataclass
class ProblemConfig:
    """Dimension bounds and defaults used by the data layer.

    New matrix cells introduced by growing a dimension are filled with
    ``default_criteria_term`` / ``default_alternative_term``.
    """
    min_count: int = 1
    max_count: int = 20

    n_alternatives: int = 4
    n_criteria: int = 5
    n_experts: int = 4

    default_criteria_term: str = "M"
    default_alternative_term: str = "G"

    alternative_prefix: str = "Alternative"
    criterion_prefix: str = "Criterion"
    expert_prefix: str = "Expert"

    def check_count(self, name: str, value: int) -> int:
        """Return *value* if inside ``[min_count, max_count]``, else raise."""
        if not self.min_count <= value <= self.max_count:
            raise ValueError(
                f"{name} must be between {self.min_count} and {self.max_count}, got {value}"
            )
        return value


# =========================================================================
# Aggregation
# =========================================================================

@dataclass
class AggregationConfig:
    """Expert aggregation numerics.

    Values ``<= 0`` inside a geometric mean are replaced by
    ``geometric_mean_epsilon`` before multiplying.
    """
    geometric_mean_epsilon: float = 1e-10


# =========================================================================
# Output
# =========================================================================

@dataclass
class OutputConfig:
    """Result export settings."""
    export: bool = True
    float_format: str = "%.8f"
    save_step_tables: bool = True
    save_debug_log: bool = True


# =========================================================================
# Master Configuration
# =========================================================================

@dataclass
class Config:
    """Master configuration composing every sub-config."""
    paths: PathConfig = field(default_factory=PathConfig)
    problem: ProblemConfig = field(default_factory=ProblemConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # --- convenience properties ---

    @property
    def output_dir(self) -> str:
        return str(self.paths.output_dir)

    # --- serialisation ---

    def to_dict(self) -> Dict:
        def _cvt(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: _cvt(v) for k, v in obj.__dict__.items()}
            if isinstance(obj, Enum):
                return obj.value
            if isinstance(obj, Path):
                return str(obj)
            if isinstance(obj, (list, tuple)):
                return [_cvt(i) for i in obj]
            if isinstance(obj, dict):
                return {k: _cvt(v) for k, v in obj.items()}
            return obj
        return _cvt(self)

    def save(self, filepath: Path) -> None:
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def summary(self) -> str:
        return (
            f"\n{'='*72}\n"
            f"  Fuzzy ARAS Configuration Summary\n"
            f"{'='*72}\n\n"
            f"  PROBLEM\n"
            f"    Count bounds    : [{self.problem.min_count}, {self.problem.max_count}]\n"
            f"    Default terms   : criteria={self.problem.default_criteria_term!r}, "
            f"alternatives={self.problem.default_alternative_term!r}\n\n"
            f"  AGGREGATION\n"
            f"    GM epsilon      : {self.aggregation.geometric_mean_epsilon:g}\n\n"
            f"  OUTPUT\n"
            f"    Directory       : {self.output_dir}\n"
            f"    Export          : {self.output.export}\n"
            f"    Step tables     : {self.output.save_step_tables}\n"
            f"    Debug log       : {self.output.save_debug_log}\n"
            f"{'='*72}\n"
        )


# =========================================================================
# Global Config Singleton
# =========================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Return global config (create default on first call)."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_default_config() -> Config:
    """Return a *fresh* default Config instance."""
    return Config()


def set_config(config: Config) -> None:
    """Replace the global config singleton."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset to a fresh default Config."""
    global _config
    _config = Config()

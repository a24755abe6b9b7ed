"""Monte Carlo simulation module."""

from .batch import BatchTally, run_batch
from .odds import (
    OddsResult,
    OddsConfig,
    OddsCalculator,
    calculate,
    derive_seed,
    partition_simulations,
    FAST_SIMULATIONS,
    REFINED_SIMULATIONS,
)

__all__ = [
    "BatchTally",
    "run_batch",
    "OddsResult",
    "OddsConfig",
    "OddsCalculator",
    "calculate",
    "derive_seed",
    "partition_simulations",
    "FAST_SIMULATIONS",
    "REFINED_SIMULATIONS",
]

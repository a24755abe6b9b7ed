"""
Parallel Monte Carlo odds aggregation.

The requested simulation count is split into batches that run on a worker
pool with no communication between them. Partial tallies are reduced only
once every worker has finished.

Two randomness modes are supported:
- non-deterministic: every batch draws an independent seed from OS entropy
- deterministic: a base seed is hashed from the sorted hole cards, sorted
  board and opponent count, and batch i is seeded from (base seed, i). The
  batch layout is fixed by configuration rather than by the worker count,
  so identical inputs give identical results on any machine.

Reproducibility depends on the generator algorithm. Batches always use
numpy's PCG64 bit generator; swapping it changes the exact numbers, not
their distribution.
"""

import hashlib
import logging
import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Union

import numpy as np

from pokerodds.game.cards import Card, parse_cards
from pokerodds.game.evaluator import HandCategory
from .batch import BatchTally, run_batch

logger = logging.getLogger(__name__)

# Simulation tiers used by callers: a quick first pass, then a refined one
FAST_SIMULATIONS = 10_000
REFINED_SIMULATIONS = 50_000

MAX_OPPONENTS = 9
BOARD_SIZES = (0, 3, 4, 5)

CardsLike = Union[str, Iterable[Union[str, Card]]]


@dataclass(frozen=True)
class OddsResult:
    """Outcome percentages for one calculation."""
    win_rate: float   # 0-100
    tie_rate: float   # 0-100
    lose_rate: float  # 0-100
    simulations: int
    best_hand: Optional[HandCategory] = None

    @classmethod
    def empty(cls) -> "OddsResult":
        """Zeroed result returned for unusable input."""
        return cls(win_rate=0.0, tie_rate=0.0, lose_rate=0.0, simulations=0)

    @property
    def equity(self) -> float:
        """Pot share in percent, counting ties as half."""
        return self.win_rate + self.tie_rate / 2


def available_cpus() -> int:
    """CPUs this process may run on, honouring affinity limits where supported."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


@dataclass
class OddsConfig:
    """Configuration for the odds calculator."""
    max_workers: Optional[int] = None  # None = available_cpus()
    executor: str = "process"          # "process" or "thread"
    deterministic_batches: int = 16    # Fixed batch layout for seeded runs

    def __post_init__(self):
        if self.executor not in ("process", "thread"):
            raise ValueError(f"Unknown executor: {self.executor}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.deterministic_batches < 1:
            raise ValueError("deterministic_batches must be at least 1")

    @property
    def workers(self) -> int:
        return self.max_workers or available_cpus()


@dataclass(frozen=True)
class BatchTask:
    """Read-only inputs for one batch, picklable for process pools."""
    hole_cards: tuple[Card, ...]
    community_cards: tuple[Card, ...]
    excluded_cards: frozenset[Card]
    cards_needed_for_board: int
    num_opponents: int
    trial_count: int
    seed: np.random.SeedSequence


def _run_task(task: BatchTask) -> BatchTally:
    rng = np.random.Generator(np.random.PCG64(task.seed))
    return run_batch(
        task.hole_cards,
        task.community_cards,
        task.excluded_cards,
        task.cards_needed_for_board,
        task.num_opponents,
        task.trial_count,
        rng,
    )


def partition_simulations(total: int, batches: int) -> list[int]:
    """
    Split `total` trials into batch sizes.

    All batches get the same share and the last one absorbs the remainder.
    Never returns more batches than trials.
    """
    if total <= 0:
        return []
    batches = max(1, min(batches, total))
    share = total // batches
    sizes = [share] * (batches - 1)
    sizes.append(total - share * (batches - 1))
    return sizes


def derive_seed(
    hole_cards: Iterable[Card],
    community_cards: Iterable[Card],
    num_opponents: int,
) -> int:
    """
    Hash the inputs into a 64-bit base seed.

    Card order does not matter: both card sets are sorted before encoding.
    """
    hole = " ".join(str(c) for c in sorted(hole_cards))
    board = " ".join(str(c) for c in sorted(community_cards))
    key = f"{hole}|{board}|{num_opponents}"
    digest = hashlib.sha256(key.encode("ascii")).digest()
    return int.from_bytes(digest[:8], "big")


def batch_seeds(count: int, base_seed: Optional[int] = None) -> list[np.random.SeedSequence]:
    """Seeds for `count` batches, derived from `base_seed` or fresh entropy."""
    if base_seed is None:
        return np.random.SeedSequence().spawn(count)
    return [np.random.SeedSequence([base_seed, index]) for index in range(count)]


class OddsCalculator:
    """
    Monte Carlo win/tie/lose estimator against random opponents.

    Fans batches out to a worker pool sized to the available CPUs and
    reduces their tallies into an OddsResult.
    """

    def __init__(self, config: Optional[OddsConfig] = None):
        self.config = config or OddsConfig()

    def calculate(
        self,
        hole_cards: CardsLike,
        community_cards: CardsLike = (),
        num_opponents: int = 1,
        simulations: int = FAST_SIMULATIONS,
        deterministic: bool = False,
    ) -> OddsResult:
        """
        Estimate hero's odds.

        Args:
            hole_cards: Hero's hole cards, exactly 2
            community_cards: Known board cards (0, 3, 4 or 5)
            num_opponents: Number of random opponents (1-9)
            simulations: Total number of trials
            deterministic: Derive all randomness from the inputs

        Returns:
            OddsResult; zeroed when hole_cards does not hold 2 cards
        """
        hole = parse_cards(hole_cards)
        board = parse_cards(community_cards)

        if len(hole) != 2:
            logger.debug("Expected 2 hole cards, got %d", len(hole))
            return OddsResult.empty()

        if len(board) not in BOARD_SIZES:
            raise ValueError(f"Board must have 0, 3, 4 or 5 cards, got {len(board)}")
        if not 1 <= num_opponents <= MAX_OPPONENTS:
            raise ValueError(f"num_opponents must be between 1 and {MAX_OPPONENTS}")
        if simulations < 1:
            raise ValueError("simulations must be positive")

        known = hole + board
        if len(set(known)) != len(known):
            raise ValueError("Duplicate cards detected")

        if deterministic:
            sizes = partition_simulations(simulations, self.config.deterministic_batches)
            seeds = batch_seeds(len(sizes), derive_seed(hole, board, num_opponents))
        else:
            sizes = partition_simulations(simulations, self.config.workers)
            seeds = batch_seeds(len(sizes))

        tasks = [
            BatchTask(
                hole_cards=tuple(hole),
                community_cards=tuple(board),
                excluded_cards=frozenset(known),
                cards_needed_for_board=5 - len(board),
                num_opponents=num_opponents,
                trial_count=size,
                seed=seed,
            )
            for size, seed in zip(sizes, seeds)
        ]

        logger.debug(
            "Running %d simulations in %d batches (deterministic=%s)",
            simulations, len(tasks), deterministic,
        )

        tallies = self._run_tasks(tasks)
        total = reduce(BatchTally.merge, tallies, BatchTally())

        logger.debug(
            "Finished: %d wins, %d ties, %d losses",
            total.wins, total.ties, total.losses,
        )

        return OddsResult(
            win_rate=total.wins / simulations * 100,
            tie_rate=total.ties / simulations * 100,
            lose_rate=total.losses / simulations * 100,
            simulations=simulations,
            best_hand=total.best_category,
        )

    def _run_tasks(self, tasks: list[BatchTask]) -> list[BatchTally]:
        """Run every batch and return once all of them have finished."""
        workers = min(self.config.workers, len(tasks))
        if workers <= 1:
            return [_run_task(task) for task in tasks]

        if self.config.executor == "process":
            pool = ProcessPoolExecutor(max_workers=workers)
        else:
            pool = ThreadPoolExecutor(max_workers=workers)

        # Leaving the block joins the pool
        with pool:
            tallies = list(pool.map(_run_task, tasks))
        return tallies


def calculate(
    hole_cards: CardsLike,
    community_cards: CardsLike = (),
    num_opponents: int = 1,
    simulations: int = FAST_SIMULATIONS,
    deterministic: bool = False,
    config: Optional[OddsConfig] = None,
) -> OddsResult:
    """Convenience wrapper around OddsCalculator.calculate."""
    return OddsCalculator(config).calculate(
        hole_cards,
        community_cards,
        num_opponents=num_opponents,
        simulations=simulations,
        deterministic=deterministic,
    )

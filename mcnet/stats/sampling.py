"""
Null distribution and z-score of the motif clustering coefficient.

The observed coefficient is compared with the coefficients of random graphs
that have the same number of nodes and the same number of motif instances
(see :mod:`mcnet.stats.null_models`). Trials are independent, so they can be
spread over a process pool; every trial draws from its own child
``SeedSequence`` so parallel and sequential runs give identical samples for a
given seed.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from ..core.graph import Graph
from ..core.oracle import IsomorphismOracle
from ..core.pattern import Pattern
from ..core.timing import timed
from ..exceptions import InputError
from ..motifs.clustering import motif_clustering
from ..motifs.instances import find_instances
from .null_models import DEFAULT_MAX_TRIALS, synthesize

logger = logging.getLogger(__name__)

# Recorded in place of a coefficient for a trial that produced no usable value
FAILED = -1.0


@dataclass
class SampleStatResult:
    """
    Observed motif clustering coefficient against its null distribution.

    Attributes
    ----------
    observed : float
        Coefficient of the input graph (NaN when undefined)
    z_score : float
        ``(observed - mean) / std`` over valid samples; NaN when there are
        no valid samples or the observed value is undefined. ``std`` is
        floored at 1e-12, so a zero-variance null gives a finite score
        rather than NaN: 0.0 when ``observed`` equals the mean, a very large
        magnitude otherwise.
    p_value : float
        Two-tailed p-value (normal approximation); NaN with the z-score
    samples : ndarray
        One value per trial; failed or undefined trials hold ``-1.0``
    target_count : int
        Motif instances of the input graph, placed in every null graph
    n_valid : int
        Trials contributing to the statistics
    n_failed : int
        Trials where synthesis did not reach ``target_count``
    n_undefined : int
        Trials whose graph had fewer than two instances
    mean : float
        Mean of the valid samples
    std : float
        Population standard deviation of the valid samples
    elapsed : float
        Wall-clock seconds spent sampling
    """

    observed: float
    z_score: float
    p_value: float
    samples: NDArray[np.float64]
    target_count: int
    n_valid: int
    n_failed: int
    n_undefined: int
    mean: float
    std: float
    elapsed: float = field(default=0.0, compare=False)

    @property
    def partial_failure(self) -> bool:
        """True if any trial failed to produce a sample."""
        return self.n_failed + self.n_undefined > 0

    @property
    def defined(self) -> bool:
        return not np.isnan(self.z_score)

    def __str__(self) -> str:
        return (
            f"Motif clustering coefficient = {self.observed:.8f}, "
            f"z-score = {self.z_score:.8f}"
        )

    def summary(self) -> Dict[str, Any]:
        """Return a dictionary summary of the result."""
        return {
            "mcc": self.observed,
            "z_score": self.z_score,
            "p_value": self.p_value,
            "null_mean": self.mean,
            "null_std": self.std,
            "target_count": self.target_count,
            "n_samples": len(self.samples),
            "n_valid": self.n_valid,
            "n_failed": self.n_failed,
            "n_undefined": self.n_undefined,
        }


def null_moments(samples: Sequence[float]) -> Tuple[float, float, int]:
    """
    Mean and population standard deviation of the valid samples.

    Negative values (the failure sentinel) and NaNs are ignored. The
    variance is computed as ``E[X^2] - E[X]^2``, clamped at zero.

    Returns
    -------
    mean, std, n_valid
        ``mean`` and ``std`` are NaN when ``n_valid`` is 0
    """
    values = np.asarray(samples, dtype=np.float64)
    valid = values[values >= 0.0]
    n_valid = int(valid.size)
    if n_valid == 0:
        return float("nan"), float("nan"), 0
    mean = float(np.sum(valid) / n_valid)
    mean_sq = float(np.sum(valid * valid) / n_valid)
    return mean, float(np.sqrt(max(mean_sq - mean * mean, 0.0))), n_valid


def z_score(observed: float, samples: Sequence[float]) -> float:
    """
    Z-score of ``observed`` against the valid samples.

    Uses the population (not sample) variance. The standard deviation is
    floored at 1e-12, so a degenerate distribution gives a finite score
    (0.0 if ``observed`` equals its value, large otherwise) instead of the
    NaN or infinity of a plain division. Returns NaN when ``observed`` is
    NaN or no sample is valid.
    """
    mean, std, n_valid = null_moments(samples)
    if n_valid == 0 or np.isnan(observed):
        return float("nan")
    return (observed - mean) / max(std, 1e-12)


def _run_trial(
    n_nodes: int,
    directed: bool,
    M: Pattern,
    target_count: int,
    max_trials: int,
    seed: np.random.SeedSequence,
    oracle: Optional[IsomorphismOracle] = None,
    cancel: Optional[Any] = None,
) -> Tuple[float, str]:
    """Synthesise and score one null graph."""
    rng = np.random.default_rng(seed)
    result = synthesize(
        n_nodes, directed, M, target_count, max_trials, rng=rng, oracle=oracle, cancel=cancel
    )
    if not result.success:
        return FAILED, "failed"
    clustering = motif_clustering(result.graph, M, oracle)
    if not clustering.defined:
        return FAILED, "undefined"
    return clustering.value, "ok"


def sample_null_coefficients(
    n_nodes: int,
    directed: bool,
    M: Pattern,
    target_count: int,
    sample_size: int,
    max_trials: int = DEFAULT_MAX_TRIALS,
    n_jobs: int = 1,
    seed: Optional[int] = None,
    oracle: Optional[IsomorphismOracle] = None,
    cancel: Optional[Any] = None,
) -> List[Tuple[float, str]]:
    """
    Clustering coefficients of ``sample_size`` independent null graphs.

    Parameters
    ----------
    n_jobs : int, default 1
        Worker processes; 1 runs in the calling process, -1 uses all cores
        but one
    seed : int, optional
        Root seed; each trial uses its own spawned child sequence
    cancel : object with ``is_set()``, optional
        Cancellation token; use a ``multiprocessing.Manager().Event()`` when
        ``n_jobs != 1``

    Returns
    -------
    list of (float, str)
        ``(value, status)`` per trial in trial order; status is "ok",
        "failed" or "undefined"
    """
    seeds = np.random.SeedSequence(seed).spawn(sample_size)
    tasks = [
        (n_nodes, directed, M, target_count, max_trials, s, oracle, cancel)
        for s in seeds
    ]

    if n_jobs == -1:
        n_jobs = max(1, mp.cpu_count() - 1)
    n_jobs = min(n_jobs, len(tasks))

    if n_jobs <= 1:
        results = [_run_trial(*task) for task in tasks]
    else:
        with mp.Pool(processes=n_jobs) as pool:
            results = pool.starmap(_run_trial, tasks)
    return results


def sample(
    G: Graph,
    M: Pattern,
    sample_size: int,
    max_trials: int = DEFAULT_MAX_TRIALS,
    n_jobs: int = 1,
    seed: Optional[int] = None,
    oracle: Optional[IsomorphismOracle] = None,
    cancel: Optional[Any] = None,
    timing: bool = False,
) -> SampleStatResult:
    """
    Motif clustering coefficient of ``G`` and its z-score against null graphs.

    Parameters
    ----------
    G : Graph
        Observed graph
    M : Pattern
        Motif
    sample_size : int
        Number of null graphs to synthesise
    max_trials : int, default 200
        Trial budget of each synthesis run
    n_jobs : int, default 1
        Worker processes for the trials
    seed : int, optional
        Root seed for reproducible sampling
    oracle : IsomorphismOracle, optional
        Matching backend
    cancel : object with ``is_set()``, optional
        Cancellation token passed to every synthesis run
    timing : bool, default False
        Log the time spent in each phase

    Returns
    -------
    SampleStatResult
    """
    if sample_size < 0:
        raise InputError(f"sample_size must be >= 0, got {sample_size}")
    oracle = oracle or IsomorphismOracle()

    with timed("Motif clustering", enabled=timing, log=logger):
        instances = find_instances(G, M, oracle)
        observed = motif_clustering(G, M, oracle, instances=instances)
    target_count = instances.unique_count
    logger.info(f"Observed {target_count} motif instances, {observed}")

    with timed(f"{sample_size} null samples", enabled=timing, log=logger) as timer:
        trials = sample_null_coefficients(
            G.n_nodes, G.directed, M, target_count, sample_size,
            max_trials=max_trials, n_jobs=n_jobs, seed=seed, oracle=oracle, cancel=cancel,
        )

    samples = np.array([value for value, _ in trials], dtype=np.float64)
    n_failed = sum(1 for _, status in trials if status == "failed")
    n_undefined = sum(1 for _, status in trials if status == "undefined")

    mean, std, n_valid = null_moments(samples)
    z = z_score(observed.value, samples)
    p_value = float("nan") if np.isnan(z) else float(2 * sp_stats.norm.sf(abs(z)))

    if n_failed or n_undefined:
        logger.warning(
            f"{n_failed} of {sample_size} null samples could not be synthesised and "
            f"{n_undefined} had an undefined coefficient; they are excluded"
        )
    if n_valid == 0:
        logger.warning("No valid null samples; z-score is undefined")

    return SampleStatResult(
        observed=observed.value,
        z_score=z,
        p_value=p_value,
        samples=samples,
        target_count=target_count,
        n_valid=n_valid,
        n_failed=n_failed,
        n_undefined=n_undefined,
        mean=mean,
        std=std,
        elapsed=timer.elapsed,
    )

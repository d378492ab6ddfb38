"""
Generate sets of colors that are maximally distinguishable from each other
and from a set of reserved colors.

The search runs in three phases:

1. seed: a farthest-first pick from a scrambled Halton pool over the sRGB cube
2. refine: greedy hill climbing on the closest pair (or, for the mean target,
   on random members); only the distances of the moved color are recomputed
3. arrange: farthest-first ordering, so that every prefix of the result is
   itself a well spread palette
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial import cKDTree
from scipy.stats import qmc

from .color import ColorValue
from .config import DEFAULT_CONFIG
from .conversions import convert
from .delta_e import delta_e, lab_array
from .errors import InvalidArgument

logger = logging.getLogger(__name__)

MID_GRAY_LAB = np.array([50.0, 0.0, 0.0])

# Halton draws before giving up on filling the lightness band
MAX_POOL_DRAWS = 8

IMPROVEMENT_EPSILON = 1e-6

AWAY_SCALES = np.array([1.0, 0.5, 0.25])

# optimization phases run for each DistinctConfig.target
PHASES = {
    "min": ("min",),
    "mean": ("mean",),
    "mean-min": ("mean", "min"),
}


@dataclass
class IterationStatistics:
    iteration: int
    min_closest_distance: float
    mean_closest_distance: float
    closest_pair: tuple
    accepted: int
    colors: list = field(default_factory=list)


@dataclass
class DistinctSet:
    """Result of one generation call. Iterates over the generated colors."""
    colors: list
    reserved: list
    min_distance: float
    mean_distance: float
    iterations: int

    def __len__(self):
        return len(self.colors)

    def __iter__(self):
        return iter(self.colors)

    def __getitem__(self, index):
        return self.colors[index]


def farthest_first(labs, count, metric="ciede2000", fixed=None):
    """Indices of `count` rows of `labs`, each as far as possible from all earlier picks.

    Rows of `fixed` count as already picked. Without them the walk starts at
    the row farthest from mid gray.

    See: https://en.wikipedia.org/wiki/Farthest-first_traversal
    """
    labs = np.asarray(labs, dtype=float)
    if count > len(labs):
        raise InvalidArgument("count", f"cannot pick more than {len(labs)} rows", count)
    fixed = np.empty((0, 3)) if fixed is None else np.asarray(fixed, dtype=float).reshape(-1, 3)

    min_dist = np.full(len(labs), np.inf)
    for lab in fixed:
        np.minimum(min_dist, delta_e(lab, labs, metric), out=min_dist)

    scores = min_dist if len(fixed) else delta_e(MID_GRAY_LAB, labs, metric)
    order = []
    for _ in range(count):
        idx = int(np.argmax(scores))
        order.append(idx)
        np.minimum(min_dist, delta_e(labs[idx], labs, metric), out=min_dist)
        min_dist[idx] = -np.inf
        scores = min_dist
    return order


def rearrange_sequence(colors, metric="ciede2000", reserved=()):
    """Re-arrange colors so that each one is as distinct as possible from its predecessors.

    Reserved colors count as already emitted. This is a heuristic; the tail
    of the sequence is not optimal.
    """
    colors = list(colors)
    if len(colors) < 2:
        return colors
    reserved = list(reserved)
    fixed = lab_array(reserved) if reserved else None
    return [colors[i] for i in farthest_first(lab_array(colors), len(colors), metric, fixed)]


class DistanceResult:
    """Nearest-neighbour bookkeeping over generated and reserved colors.

    Rows [0, n) of `labs` are generated colors, the remaining rows are
    reserved. Only generated rows carry an entry: distances between two
    reserved colors cannot change and take no part in the objective.
    """

    def __init__(self, labs, n_generated, metric, workers=1, block_size=256):
        self.labs = labs
        self.n = n_generated
        self.metric = metric
        self.closest_distance = np.full(n_generated, np.inf)
        self.closest_index = np.full(n_generated, -1, dtype=np.intp)
        if metric == "cie76":
            self._scan_tree(workers)
        else:
            self._scan_blocks(workers, block_size)

    def _scan_tree(self, workers):
        tree = cKDTree(self.labs)
        dist, idx = tree.query(self.labs[:self.n], k=2, workers=workers)
        # with exact duplicates the row itself may come second
        own = idx[:, 0] == np.arange(self.n)
        self.closest_distance[:] = np.where(own, dist[:, 1], dist[:, 0])
        self.closest_index[:] = np.where(own, idx[:, 1], idx[:, 0])

    def _scan_block(self, start, stop):
        rows = np.arange(stop - start)
        d = delta_e(self.labs[start:stop, None, :], self.labs[None, :, :], self.metric)
        d[rows, rows + start] = np.inf
        idx = np.argmin(d, axis=1)
        return start, d[rows, idx], idx

    def _scan_blocks(self, workers, block_size):
        blocks = [(start, min(start + block_size, self.n)) for start in range(0, self.n, block_size)]
        if workers > 1 and len(blocks) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(lambda bounds: self._scan_block(*bounds), blocks))
        else:
            results = [self._scan_block(*bounds) for bounds in blocks]
        for start, dist, idx in results:
            self.closest_distance[start:start + len(dist)] = dist
            self.closest_index[start:start + len(idx)] = idx

    def distances_from(self, lab):
        return delta_e(lab, self.labs, self.metric)

    def rescan(self, i):
        d = self.distances_from(self.labs[i])
        d[i] = np.inf
        j = int(np.argmin(d))
        self.closest_distance[i] = d[j]
        self.closest_index[i] = j

    def move(self, i, lab, distances):
        """Place generated color i at `lab`; `distances` run from `lab` to every row."""
        distances = np.array(distances, dtype=float)
        distances[i] = np.inf
        self.labs[i] = lab

        generated = distances[:self.n]
        # colors whose nearest neighbour moved away need a full rescan
        stale = np.flatnonzero((self.closest_index == i) & (generated >= self.closest_distance))
        closer = generated < self.closest_distance
        self.closest_distance[closer] = generated[closer]
        self.closest_index[closer] = i

        j = int(np.argmin(distances))
        self.closest_distance[i] = distances[j]
        self.closest_index[i] = j

        for k in stale:
            self.rescan(k)

    def closest_pair(self):
        i = int(np.argmin(self.closest_distance))
        return i, int(self.closest_index[i])

    @property
    def min_closest_distance(self):
        return float(self.closest_distance.min())

    @property
    def mean_closest_distance(self):
        return float(self.closest_distance.mean())


class DistinctSetGenerator:
    """Search state for one distinct palette request."""

    def __init__(self, config=None):
        self.config = (config or DEFAULT_CONFIG).validate()
        self.rng = np.random.default_rng(self.config.seed)
        self.rgb = None

    def run(self, n, reserved=(), callback=None):
        config = self.config
        started = time.perf_counter()

        reserved = list(reserved)
        reserved_rgb = np.array([c.to_rgb_scaled() for c in reserved], dtype=float).reshape(-1, 3)
        reserved_lab = convert(reserved_rgb, "srgb", "lab")

        rgb, lab = self._seed(n, reserved_lab)
        self.rgb = np.vstack([rgb, reserved_rgb])
        result = DistanceResult(np.vstack([lab, reserved_lab]), n, config.metric,
                                config.workers, config.block_size)
        logger.info("Seeded %d colors (%d reserved): min distance %.3f",
                    n, len(reserved), result.min_closest_distance)

        iterations = self._refine(result, n, started, callback)

        colors = [ColorValue(*row) for row in self.rgb[:n]]
        fixed = result.labs[n:] if reserved else None
        order = farthest_first(result.labs[:n], n, config.metric, fixed)
        colors = [colors[i] for i in order]

        logger.info("Generated %d distinct colors in %.2fs: min distance %.3f",
                    n, time.perf_counter() - started, result.min_closest_distance)
        return DistinctSet(colors, reserved, result.min_closest_distance,
                           result.mean_closest_distance, iterations)

    def _seed(self, n, reserved_lab):
        config = self.config
        sampler = qmc.Halton(d=3, scramble=True, seed=config.seed)
        wanted = max(config.pool_factor * n, config.min_pool)

        pool_rgb, pool_lab, kept = [], [], 0
        for _ in range(MAX_POOL_DRAWS):
            rgb = sampler.random(wanted)
            lab = convert(rgb, "srgb", "lab")
            inside = (lab[:, 0] >= config.min_lightness) & (lab[:, 0] <= config.max_lightness)
            pool_rgb.append(rgb[inside])
            pool_lab.append(lab[inside])
            kept += int(inside.sum())
            if kept >= wanted:
                break
        if kept < n:
            raise InvalidArgument("min_lightness/max_lightness",
                                  f"lightness band too narrow to hold {n} colors",
                                  (config.min_lightness, config.max_lightness))

        rgb, lab = np.vstack(pool_rgb), np.vstack(pool_lab)
        fixed = reserved_lab if len(reserved_lab) else None
        picks = farthest_first(lab, n, config.metric, fixed)
        return rgb[picks], lab[picks]

    def _refine(self, result, n, started, callback):
        rounds = 0
        for target in PHASES[self.config.target]:
            iterations, out_of_time = self._refine_phase(target, result, n, started, callback, rounds)
            rounds += iterations
            if out_of_time:
                break
        return rounds

    def _refine_phase(self, target, result, n, started, callback, offset):
        """Run one optimization phase; returns (rounds, whether the time budget ran out)."""
        config = self.config
        rejected = accepted = iteration = 0
        out_of_time = False

        for iteration in range(1, config.max_iterations + 1):
            if target == "min":
                i, j = result.closest_pair()
                # reserved colors never move
                movers = (i,) if j >= n else (i, j)
                moved = any(self._try_move(result, k) for k in movers)
            else:
                moved = self._try_move_mean(result, int(self.rng.integers(n)))
            if moved:
                accepted += 1
                rejected = 0
            else:
                rejected += 1

            if (offset + iteration) % config.report_every == 0:
                logger.debug("[%8d] D_min = %.3f; D_mean = %.3f; accepted = %d",
                             offset + iteration, result.min_closest_distance,
                             result.mean_closest_distance, accepted)
                if callback is not None:
                    callback(self._statistics(result, offset + iteration, accepted, n))

            if rejected >= config.patience:
                logger.debug("No improvement in %d rounds, stopping", rejected)
                break
            if config.time_budget is not None and time.perf_counter() - started > config.time_budget:
                logger.info("Time budget of %.2fs exhausted after %d rounds", config.time_budget, offset + iteration)
                out_of_time = True
                break

        logger.info("Refinement (%s): %d rounds, %d moves accepted", target, iteration, accepted)
        return iteration, out_of_time

    def _proposals(self, result, k):
        """Candidate positions for generated color k inside the gamut and the lightness band.

        Returns (rgb, lab, distances to every row) or None when no candidate survives.
        """
        config = self.config
        current = result.closest_distance[k]
        origin = result.labs[k]

        direction = origin - result.labs[result.closest_index[k]]
        norm = np.linalg.norm(direction)
        if norm < 1e-9:
            direction = self.rng.normal(size=3)
            norm = np.linalg.norm(direction)
        step = config.step_factor * current + config.min_step

        away = origin + np.outer(step * AWAY_SCALES, direction / norm)
        jitter = origin + self.rng.normal(scale=step, size=(config.random_trials, 3))

        # back through sRGB so that every proposal lies inside the gamut
        trial_rgb = convert(np.vstack([away, jitter]), "lab", "srgb")
        trial_lab = convert(trial_rgb, "srgb", "lab")
        inside = (trial_lab[:, 0] >= config.min_lightness) & (trial_lab[:, 0] <= config.max_lightness)
        if not inside.any():
            return None
        trial_rgb, trial_lab = trial_rgb[inside], trial_lab[inside]

        distances = delta_e(trial_lab[:, None, :], result.labs[None, :, :], config.metric)
        distances[:, k] = np.inf
        return trial_rgb, trial_lab, distances

    def _try_move(self, result, k):
        """Propose moves for generated color k; apply the best one if it helps."""
        proposals = self._proposals(result, k)
        if proposals is None:
            return False
        trial_rgb, trial_lab, distances = proposals

        nearest = distances.min(axis=1)
        best = int(np.argmax(nearest))
        if nearest[best] <= result.closest_distance[k] + IMPROVEMENT_EPSILON:
            return False

        self.rgb[k] = trial_rgb[best]
        result.move(k, trial_lab[best], distances[best])
        return True

    def _try_move_mean(self, result, k):
        """Move color k to its best proposal; undo the move unless the mean nearest distance grows."""
        proposals = self._proposals(result, k)
        if proposals is None:
            return False
        trial_rgb, trial_lab, distances = proposals
        best = int(np.argmax(distances.min(axis=1)))

        before = result.mean_closest_distance
        old_rgb, old_lab = self.rgb[k].copy(), result.labs[k].copy()
        self.rgb[k] = trial_rgb[best]
        result.move(k, trial_lab[best], distances[best])
        if result.mean_closest_distance > before + IMPROVEMENT_EPSILON:
            return True

        self.rgb[k] = old_rgb
        result.move(k, old_lab, result.distances_from(old_lab))
        return False

    def _statistics(self, result, iteration, accepted, n):
        return IterationStatistics(
            iteration=iteration,
            min_closest_distance=result.min_closest_distance,
            mean_closest_distance=result.mean_closest_distance,
            closest_pair=result.closest_pair(),
            accepted=accepted,
            colors=[ColorValue(*row) for row in self.rgb[:n]],
        )


def _check_request(n, reserved):
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidArgument("n", "must be an integer", n)
    if n < 2:
        raise InvalidArgument("n", "at least two colors are required", n)
    reserved = list(reserved)
    for color in reserved:
        if not isinstance(color, ColorValue):
            raise InvalidArgument("reserved", "must contain ColorValue instances", type(color).__name__)
    return int(n), reserved


def generate_set(n, reserved=(), config=None, callback=None):
    """Like `generate`, but returns the full DistinctSet with its statistics."""
    n, reserved = _check_request(n, reserved)
    return DistinctSetGenerator(config).run(n, reserved, callback)


def generate(n, reserved=(), config=None, callback=None):
    """Generate `n` colors that are as distinct as possible.

    The minimum pairwise perceptual distance among the generated and the
    reserved colors is maximized; reserved colors are never returned. The
    result is ordered so that any prefix is itself a distinct palette.
    Raises InvalidArgument for n < 2.
    """
    return generate_set(n, reserved, config, callback).colors

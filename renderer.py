import numpy as np
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence, Tuple
import logging
import math
import time

from PIL import Image

from gray_code import to_gray
from hilbert_curve import distance_to_point, distances_to_points
from sat_errors import ResourceLimitError
from sat_sentence import SATSentence

logger = logging.getLogger(__name__)

# The maximum number of variables supported without projection.
# The pixel buffer holds 3 * 2^n bytes.
MAX_N_VARIABLES = 30

DEFAULT_BETA = 0.5
DEFAULT_BATCH_SIZE = 1 << 16

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
PURPLE: Color = (100, 0, 100)
GREEN: Color = (0, 255, 0)


def color_interp(a: Sequence[int], b: Sequence[int], x):
    """
    Blend two colors: c = (1 - x)·a + x·b per channel, truncated to [0, 255].

    x may be a float (returns a tuple) or an array of blend factors
    (returns an (N, 3) uint8 array).
    """
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if np.isscalar(x):
        blended = (1.0 - x) * a_arr + x * b_arr
        return tuple(int(c) for c in np.clip(blended, 0, 255))

    x = np.asarray(x, dtype=np.float64).reshape(-1, 1)
    blended = (1.0 - x) * a_arr + x * b_arr
    return np.clip(blended, 0, 255).astype(np.uint8)


class SATArtRenderer:
    """Renders every assignment of a SAT sentence as one pixel."""

    def __init__(self, sentence: SATSentence,
                 n_variables: Optional[int] = None,
                 beta: float = DEFAULT_BETA,
                 unsat_color: Color = BLACK,
                 sat_color: Color = GREEN,
                 wrap_assignments: bool = True,
                 batch_size: int = DEFAULT_BATCH_SIZE,
                 max_workers: int = 1):
        if n_variables is None:
            n_variables = sentence.num_variables()

        # check that the number of variables is sane before allocating anything
        if n_variables > MAX_N_VARIABLES:
            raise ResourceLimitError(
                f"memory limit possibly exceeded: number of variables ({n_variables}) "
                f"cannot exceed MAX_N_VARIABLES ({MAX_N_VARIABLES}).")
        if n_variables < 0:
            raise ValueError(f"number of variables must be non-negative, got {n_variables}")
        if not math.isfinite(beta) or beta < 0.0:
            raise ValueError(f"beta must be a finite non-negative number, got {beta}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        if max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")

        self.sentence = sentence
        self.n_variables = n_variables
        self.beta = beta
        self.unsat_color = unsat_color
        self.sat_color = sat_color
        self.wrap_assignments = wrap_assignments
        self.batch_size = batch_size
        self.max_workers = max_workers

        self.literal_bits = sentence.literal_bits(n_variables, wrap_assignments)

        # The curve is 2^order on a side. For odd n only its left half is
        # reached by indices below 2^n.
        self.order = (n_variables + 1) // 2
        self.height = 1 << self.order
        self.width = 1 << (n_variables // 2)
        self.num_pixels = 1 << n_variables

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.height, self.width, 3

    def intensity(self, n_unsat):
        """Colormap value exp(-β·unsat), in (0, 1]."""
        if np.isscalar(n_unsat):
            return math.exp(-self.beta * n_unsat)
        return np.exp(-self.beta * np.asarray(n_unsat, dtype=np.float64))

    def render_pixel(self, i: int) -> Tuple[int, int, Color]:
        """Run the full pipeline for a single index: (x, y, color)."""
        if not 0 <= i < self.num_pixels:
            raise ValueError(f"index {i} outside [0, {self.num_pixels})")
        n_unsat = self.sentence.n_unsatisfied_clauses(
            to_gray(i), self.n_variables, self.wrap_assignments)
        color = color_interp(self.unsat_color, self.sat_color, self.intensity(n_unsat))
        x, y = distance_to_point(self.order, i)
        return x, y, color

    def render_batch(self, pixels: np.ndarray, start: int, stop: int):
        """Draw indices [start, stop) into pixels."""
        indices = np.arange(start, stop, dtype=np.int64)
        n_unsat = self.sentence.count_unsatisfied_batch(
            to_gray(indices), self.n_variables, self.wrap_assignments,
            literal_bits=self.literal_bits)
        colors = color_interp(self.unsat_color, self.sat_color, self.intensity(n_unsat))
        xs, ys = distances_to_points(self.order, indices)
        pixels[ys, xs] = colors

    def batches(self):
        for start in range(0, self.num_pixels, self.batch_size):
            yield start, min(start + self.batch_size, self.num_pixels)

    def render(self, progress: Optional[Callable[[float], None]] = None) -> np.ndarray:
        """
        Render all 2^n assignments into a fresh (height, width, 3) uint8 array.

        progress, if given, is called with the fraction of indices done after
        each batch. It has no effect on the output.
        """
        pixels = np.zeros(self.shape, dtype=np.uint8)
        batches = list(self.batches())
        logger.info("Rendering %d variables, %d clauses as a %dx%d image (%d batches)",
                    self.n_variables, self.sentence.num_clauses,
                    self.width, self.height, len(batches))
        start_time = time.time()

        done = 0
        if self.max_workers == 1:
            for start, stop in batches:
                self.render_batch(pixels, start, stop)
                done += stop - start
                if progress is not None:
                    progress(done / self.num_pixels)
        else:
            # batches write disjoint pixels, so no locking is needed
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = [pool.submit(self.render_batch, pixels, start, stop)
                           for start, stop in batches]
                for future, (start, stop) in zip(futures, batches):
                    future.result()
                    done += stop - start
                    if progress is not None:
                        progress(done / self.num_pixels)

        logger.info("Rendered %d pixels in %.2f seconds", self.num_pixels, time.time() - start_time)
        return pixels


def save_image(pixels: np.ndarray, path: str):
    """Write a rendered buffer; the format follows the file extension."""
    Image.fromarray(pixels).save(path)
    logger.info("Saved image to %s", path)


def show_image(pixels: np.ndarray, title: str = "SAT Art"):
    Image.fromarray(pixels).show(title=title)

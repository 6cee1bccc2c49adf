"""Row-partitioned multi-threaded render loop with progress reporting.

This module drives per-pixel sampling across a fixed set of worker threads:
- Image rows are split into contiguous bands, one per worker
- Each worker owns a ray buffer, an output list and a seeded RNG
- A shared row counter is bumped once per finished row
- A monitor thread polls the counter and draws a progress bar
- Band outputs are concatenated in band order, giving row-major pixels

Threads are created fresh for each render and joined before the result is
returned. The camera and the shading callback are shared read-only.

Example:
    >>> from pathtracer.camera.thin_lens import Camera
    >>> from pathtracer.core.integrator import make_pixel_shader
    >>> from pathtracer.core.renderer import render
    >>> from pathtracer.scene.presets import two_spheres
    >>> world, config = two_spheres(image_width=40)
    >>> camera = Camera(config)
    >>> colors = render(camera, 4, make_pixel_shader(world, 10), seed=7, progress=False)
    >>> len(colors) == camera.image_width * camera.image_height
    True
"""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass, field
from typing import TextIO

import numpy as np
from tqdm import tqdm

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.integrator import MAX_DEPTH, PixelShader, make_pixel_shader
from pathtracer.core.ray import Ray
from pathtracer.core.sampling import seed_rng
from pathtracer.core.vec3 import Color
from pathtracer.scene.world import World

# Seconds between progress bar refreshes
DEFAULT_PROGRESS_INTERVAL = 2.0


class RenderError(RuntimeError):
    """A render worker thread failed."""


@dataclass
class RenderSettings:
    """Sampling and scheduling parameters for one render.

    Attributes:
        samples_per_pixel: Rays traced per pixel (at least 1).
        max_depth: Maximum bounces per path. 0 renders solid black.
        workers: Number of worker threads. None uses every available CPU.
        seed: Seed for the per-worker generators. None draws OS entropy.
            A fixed seed with a fixed worker count reproduces the image.
        progress: Whether to draw a progress bar on stderr.
        progress_interval: Seconds between progress bar refreshes.
    """

    samples_per_pixel: int = 10
    max_depth: int = MAX_DEPTH
    workers: int | None = None
    seed: int | None = None
    progress: bool = True
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL

    def __post_init__(self) -> None:
        if self.samples_per_pixel < 1:
            raise ValueError(
                f"samples_per_pixel = {self.samples_per_pixel} must be at least 1"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth = {self.max_depth} must not be negative")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers = {self.workers} must be at least 1")
        if not self.progress_interval > 0.0:
            raise ValueError(
                f"progress_interval = {self.progress_interval} must be positive"
            )


# =============================================================================
# Work Partitioning
# =============================================================================


def default_worker_count() -> int:
    """Number of hardware threads available to this process."""
    return os.cpu_count() or 1


def partition_rows(height: int, workers: int) -> list[range]:
    """Split image rows into contiguous, near-equal bands.

    Every band gets height // workers rows; the height % workers leftover
    rows go one each to the trailing bands, so band sizes differ by at most
    one and the last band takes a leftover row whenever there is one.
    The number of bands is capped at height so no band is empty.

    Args:
        height: Number of image rows.
        workers: Requested number of bands.

    Returns:
        Bands in top-to-bottom order; together they cover range(height)
        exactly once.

    Raises:
        ValueError: If height or workers is less than 1.
    """
    if height < 1:
        raise ValueError(f"height = {height} must be at least 1")
    if workers < 1:
        raise ValueError(f"workers = {workers} must be at least 1")

    bands = min(workers, height)
    base, remainder = divmod(height, bands)
    first_larger = bands - remainder

    result = []
    start = 0
    for i in range(bands):
        size = base + 1 if i >= first_larger else base
        result.append(range(start, start + size))
        start += size
    return result


# =============================================================================
# Progress Reporting
# =============================================================================


class RowCounter:
    """Count of finished rows, shared by all workers.

    Workers only increment; the progress monitor only reads. Reads may be
    stale but the count never goes backward.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    @property
    def value(self) -> int:
        return self._value


class ProgressMonitor:
    """Background thread that turns the row counter into a progress bar.

    The bar is refreshed every interval seconds and the thread exits as soon
    as every row is done. stop() ends it early, e.g. when a worker failed.
    """

    def __init__(
        self,
        counter: RowCounter,
        total_rows: int,
        *,
        interval: float = DEFAULT_PROGRESS_INTERVAL,
        enabled: bool = True,
        stream: TextIO | None = None,
    ) -> None:
        self._counter = counter
        self._total = total_rows
        self._interval = interval
        self._stream = stream if stream is not None else sys.stderr
        self._enabled = enabled
        self._stop = threading.Event()
        self._bar = tqdm(
            total=total_rows,
            desc="Rendering",
            unit="row",
            file=self._stream,
            disable=not enabled,
            leave=False,
        )
        self._thread = threading.Thread(target=self._run, name="render-progress", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        """Stop polling, wait for the thread and close the bar."""
        self._stop.set()
        self._thread.join()
        self._refresh()
        self._bar.close()

    def finish(self) -> None:
        """Stop the monitor and print the completion notice."""
        self.stop()
        if self._enabled:
            print("Done.", file=self._stream, flush=True)

    def _refresh(self) -> int:
        done = self._counter.value
        if done > self._bar.n:
            self._bar.update(done - self._bar.n)
        return done

    def _run(self) -> None:
        while not self._stop.is_set():
            if self._refresh() >= self._total:
                return
            self._stop.wait(self._interval)


# =============================================================================
# Render Loop
# =============================================================================


@dataclass
class _BandResult:
    """Output slot owned by one worker, read only after it is joined."""

    rows: range
    colors: list[Color] = field(default_factory=list)
    error: BaseException | None = None


def _render_band(
    camera: Camera,
    samples_per_pixel: int,
    shade_pixel: PixelShader,
    seed: np.random.SeedSequence,
    counter: RowCounter,
    slot: _BandResult,
) -> None:
    try:
        seed_rng(seed)
        buffer: list[Ray] = [None] * samples_per_pixel  # type: ignore[list-item]
        colors = []
        for row in slot.rows:
            for col in range(camera.image_width):
                camera.get_rays(col, row, buffer)
                colors.append(shade_pixel(buffer))
            counter.increment()
        slot.colors = colors
    except BaseException as e:
        slot.error = e


def render(
    camera: Camera,
    samples_per_pixel: int,
    shade_pixel: PixelShader,
    *,
    workers: int | None = None,
    seed: int | None = None,
    progress: bool = True,
    interval: float = DEFAULT_PROGRESS_INTERVAL,
    stream: TextIO | None = None,
) -> list[Color]:
    """Render every pixel of the camera's image.

    Each pixel is computed by exactly one worker: the worker fills its ray
    buffer with samples_per_pixel fresh camera rays and calls shade_pixel
    once with the whole batch.

    Args:
        camera: The camera generating primary rays.
        samples_per_pixel: Rays per pixel (at least 1).
        shade_pixel: Callback reducing a batch of same-pixel rays to one
            color. Called concurrently from several threads.
        workers: Number of worker threads. None uses every available CPU.
        seed: Seed for the per-worker generators.
        progress: Whether to draw a progress bar.
        interval: Seconds between progress bar refreshes.
        stream: Where to draw progress. Defaults to stderr.

    Returns:
        One color per pixel in row-major order (top row first).

    Raises:
        ValueError: If samples_per_pixel or workers is less than 1.
        RenderError: If a worker thread raised. The original exception is
            chained as the cause.
    """
    if samples_per_pixel < 1:
        raise ValueError(f"samples_per_pixel = {samples_per_pixel} must be at least 1")

    if workers is None:
        workers = default_worker_count()
    bands = partition_rows(camera.image_height, workers)
    seeds = np.random.SeedSequence(seed).spawn(len(bands))
    slots = [_BandResult(rows=rows) for rows in bands]
    counter = RowCounter()

    monitor = ProgressMonitor(
        counter,
        camera.image_height,
        interval=interval,
        enabled=progress,
        stream=stream,
    )
    monitor.start()

    threads = [
        threading.Thread(
            target=_render_band,
            args=(camera, samples_per_pixel, shade_pixel, band_seed, counter, slot),
            name=f"render-worker-{i}",
        )
        for i, (band_seed, slot) in enumerate(zip(seeds, slots))
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for slot in slots:
        if slot.error is not None:
            monitor.stop()
            raise RenderError(
                f"Worker for rows {slot.rows.start}-{slot.rows.stop - 1} failed: "
                f"{slot.error}"
            ) from slot.error

    monitor.finish()

    colors: list[Color] = []
    for slot in slots:
        colors.extend(slot.colors)
    return colors


def render_image(camera: Camera, world: World, settings: RenderSettings | None = None) -> list[Color]:
    """Render a world with the standard path tracing shader.

    Convenience wrapper combining make_pixel_shader() and render().

    Args:
        camera: The camera generating primary rays.
        world: The scene to trace against.
        settings: Sampling and scheduling parameters. Defaults to
            RenderSettings().

    Returns:
        One color per pixel in row-major order.
    """
    if settings is None:
        settings = RenderSettings()

    shade_pixel = make_pixel_shader(world, settings.max_depth)
    return render(
        camera,
        settings.samples_per_pixel,
        shade_pixel,
        workers=settings.workers,
        seed=settings.seed,
        progress=settings.progress,
        interval=settings.progress_interval,
    )

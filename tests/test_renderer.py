"""Tests for the multi-threaded render loop.

Tests cover:
- Row partitioning into near-equal contiguous bands
- Render settings validation
- Row-major output order and batch size
- Reproducibility from a fixed seed
- End-to-end scenes (2x1 image, zero depth)
- Worker error propagation
- Progress reporting
"""

import io
import sys
import threading

import pytest

import pathtracer.camera.thin_lens as thin_lens
from pathtracer.camera.thin_lens import Camera, CameraConfig
from pathtracer.core.integrator import MAX_DEPTH, make_pixel_shader
from pathtracer.core.renderer import (
    RenderError,
    RenderSettings,
    RowCounter,
    partition_rows,
    render,
    render_image,
)
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import Material
from pathtracer.output.export import write_ppm
from pathtracer.scene.presets import two_spheres
from pathtracer.scene.world import World


def small_camera(width=16, aspect_ratio=16.0 / 9.0):
    _, config = two_spheres(image_width=width, aspect_ratio=aspect_ratio)
    return Camera(config)


def two_by_one_camera():
    return Camera(CameraConfig(
        aspect_ratio=2.0,
        image_width=2,
        vfov=90.0,
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        focus_dist=1.0,
    ))


class TestPartitionRows:
    """Tests for partition_rows()."""

    @pytest.mark.parametrize(
        "height, workers",
        [(10, 1), (10, 3), (10, 4), (9, 3), (225, 8), (7, 7), (1, 4), (3, 8)],
    )
    def test_bands_cover_rows_exactly(self, height, workers):
        """Test bands are contiguous, disjoint and cover [0, height)."""
        bands = partition_rows(height, workers)

        rows = [row for band in bands for row in band]
        assert rows == list(range(height))

        sizes = [len(band) for band in bands]
        assert min(sizes) >= 1
        assert max(sizes) - min(sizes) <= 1

    def test_remainder_goes_to_trailing_bands(self):
        """Test leftover rows are given to the last bands."""
        assert [len(b) for b in partition_rows(10, 3)] == [3, 3, 4]
        assert [len(b) for b in partition_rows(10, 4)] == [2, 2, 3, 3]

    def test_workers_capped_at_height(self):
        """Test there are never more bands than rows."""
        assert len(partition_rows(3, 8)) == 3

    @pytest.mark.parametrize("height, workers", [(0, 1), (5, 0), (-1, 2)])
    def test_invalid_arguments(self, height, workers):
        """Test non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            partition_rows(height, workers)


class TestRenderSettings:
    """Tests for RenderSettings validation."""

    def test_defaults(self):
        """Test the default settings."""
        settings = RenderSettings()
        assert settings.samples_per_pixel == 10
        assert settings.max_depth == MAX_DEPTH == 10
        assert settings.workers is None
        assert settings.seed is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"samples_per_pixel": 0},
            {"max_depth": -1},
            {"workers": 0},
            {"progress_interval": 0.0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test out-of-range settings raise ValueError."""
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    def test_zero_depth_allowed(self):
        """Test max_depth 0 is a valid (all black) setting."""
        assert RenderSettings(max_depth=0).max_depth == 0


class TestRowCounter:
    """Tests for the shared progress counter."""

    def test_concurrent_increments(self):
        """Test increments from many threads are all counted."""
        counter = RowCounter()

        def bump():
            for _ in range(1000):
                counter.increment()

        threads = [threading.Thread(target=bump) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counter.value == 8000


class TestRender:
    """Tests for render()."""

    def test_output_is_row_major(self):
        """Test colors come back top row first, left to right."""
        camera = small_camera()

        def shade_pixel(rays):
            d = rays[0].direction
            return Color(d.x, d.y, 0.0)

        colors = render(camera, 1, shade_pixel, workers=3, seed=1, progress=False)

        width, height = camera.image_width, camera.image_height
        assert len(colors) == width * height
        # x grows along each row, y shrinks down each column
        assert colors[0].r < colors[width - 1].r
        assert colors[0].g > colors[(height - 1) * width].g

    def test_batch_has_samples_per_pixel_rays(self):
        """Test shade_pixel receives one ray per sample."""
        camera = small_camera(width=8)
        colors = render(
            camera, 5, lambda rays: Color(len(rays), 0.0, 0.0), workers=2, progress=False
        )
        assert all(c.r == 5 for c in colors)

    @pytest.mark.parametrize("workers", [1, 3])
    def test_fixed_seed_is_reproducible(self, small_world, workers):
        """Test the same seed and worker count give identical images."""
        camera = small_camera()
        shade_pixel = make_pixel_shader(small_world, 5)

        first = render(camera, 2, shade_pixel, workers=workers, seed=123, progress=False)
        second = render(camera, 2, shade_pixel, workers=workers, seed=123, progress=False)

        assert first == second

    def test_invalid_samples(self, small_world):
        """Test zero samples per pixel is rejected."""
        with pytest.raises(ValueError):
            render(small_camera(), 0, make_pixel_shader(small_world), progress=False)

    def test_invalid_workers(self, small_world):
        """Test zero workers is rejected."""
        with pytest.raises(ValueError):
            render(small_camera(), 1, make_pixel_shader(small_world), workers=0, progress=False)

    def test_worker_error_is_raised(self):
        """Test an exception in a worker surfaces as RenderError."""

        def shade_pixel(rays):
            raise RuntimeError("boom")

        with pytest.raises(RenderError, match="boom") as exc_info:
            render(small_camera(), 1, shade_pixel, workers=2, progress=False)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_worker_system_exit_is_raised(self):
        """Test a SystemExit in one band fails the render instead of dropping rows."""

        def shade_pixel(rays):
            if rays[0].direction.y < 0.0:
                sys.exit(1)
            return Color(0.0, 0.0, 0.0)

        with pytest.raises(RenderError) as exc_info:
            render(small_camera(width=8), 1, shade_pixel, workers=2, progress=False)
        assert isinstance(exc_info.value.__cause__, SystemExit)

    def test_progress_reports_done(self, small_world):
        """Test the progress stream ends with the completion notice."""
        stream = io.StringIO()
        render(
            small_camera(width=8),
            1,
            make_pixel_shader(small_world, 2),
            workers=2,
            seed=0,
            interval=0.01,
            stream=stream,
        )
        assert stream.getvalue().rstrip().endswith("Done.")

    def test_no_progress_output_when_disabled(self, small_world):
        """Test progress=False writes nothing."""
        stream = io.StringIO()
        render(
            small_camera(width=8),
            1,
            make_pixel_shader(small_world, 2),
            progress=False,
            stream=stream,
        )
        assert stream.getvalue() == ""


class TestEndToEnd:
    """End-to-end render scenarios."""

    def test_two_by_one_left_pixel_hits_sphere(self, monkeypatch, gray):
        """Test a 2x1 image with a sphere only in front of the left pixel."""
        monkeypatch.setattr(thin_lens, "random_jitter", lambda: (0.0, 0.0))
        world = World([Sphere(Vec3(-1.0, 0.0, -1.0), 0.5, gray)])
        camera = two_by_one_camera()

        colors = render(camera, 1, make_pixel_shader(world, 1), workers=2, seed=3, progress=False)

        stream = io.StringIO()
        write_ppm(colors, camera.image_width, camera.image_height, stream)
        lines = stream.getvalue().splitlines()

        assert lines[:3] == ["P3", "2 1", "255"]
        assert len(lines) == 5
        # Depth 1 ends a path that hits anything, so the sphere pixel is black
        assert lines[3] == "0 0 0"
        assert lines[4] != lines[3]

    def test_two_by_one_unit_sphere_ahead(self, gray):
        """Test a 2x1 image of a unit sphere at (0, 0, -1) seen from the origin."""
        world = World([Sphere(Vec3(0.0, 0.0, -1.0), 1.0, gray)])
        camera = two_by_one_camera()

        colors = render(camera, 1, make_pixel_shader(world, 1), workers=1, seed=3, progress=False)

        stream = io.StringIO()
        write_ppm(colors, camera.image_width, camera.image_height, stream)
        lines = stream.getvalue().splitlines()

        assert lines[:3] == ["P3", "2 1", "255"]
        assert len(lines) == 5
        # The eye sits on the sphere, so both pixels hit it and depth 1 ends both paths
        assert lines[3:] == ["0 0 0", "0 0 0"]

    def test_zero_depth_is_all_black(self, small_world):
        """Test max_depth 0 renders solid black whatever the scene."""
        camera = small_camera()
        colors = render(camera, 1, make_pixel_shader(small_world, 0), seed=5, progress=False)
        assert all(str(c) == "0 0 0" for c in colors)

    def test_render_image_with_settings(self, small_world):
        """Test the convenience wrapper renders every pixel."""
        camera = small_camera(width=8)
        settings = RenderSettings(samples_per_pixel=2, max_depth=3, workers=2, seed=9, progress=False)
        colors = render_image(camera, small_world, settings)
        assert len(colors) == camera.image_width * camera.image_height

"""CPU path tracer for scenes of spheres.

This package renders images by Monte Carlo path tracing, with support for:
- Diffuse, metal and glass materials with optional fuzz
- A thin-lens camera with anti-aliasing and defocus blur
- Multi-threaded row-band rendering with a progress bar

Subpackages:
    core: Vectors, rays, sampling, the radiance loop and the render driver
    geometry: Sphere primitive and hit records
    materials: Scattering models and the Material variant
    camera: Thin-lens camera with ray generation
    scene: The World container and example scenes
    output: PPM and PNG export
"""

__version__ = "0.1.0"

"""Whitted-style recursive ray tracer.

This package renders still images by casting rays from a pinhole camera,
intersecting them with geometric primitives, shading hits with the Phong
model and recursively following reflected and refracted rays:
- Spheres, planes, cubes, cylinders and cones with affine transforms
- Composable color patterns (stripes, rings, checkers, gradients, blends)
- Hard shadows from point lights
- Reflection, refraction and Schlick-weighted Fresnel blending
- Scanline rendering across a process pool

Subpackages:
    core: Tuples, matrices, rays, canvas, integrator and renderer
    geometry: Shape primitives and intersection algorithms
    materials: Patterns, materials and the Phong lighting model
    scene: World container, hit preparation and YAML scene documents
    camera: Pinhole camera with ray generation
    preview: Image export, Matplotlib preview and Taichi GGUI window
"""

__version__ = "0.1.0"

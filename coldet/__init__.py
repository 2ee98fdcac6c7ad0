"""Collision detection and response for spheres and planes, with a Galton board solver."""

__version__ = "0.1.0"
"""Cameras, skeletal animation, textures, materials, particles and instanced draw batching for a 3D survival game."""

__version__ = "0.1.0"
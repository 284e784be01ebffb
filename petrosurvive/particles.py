"""A fixed-size pool of billboard particles."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

_MIN_DIRECTION_LENGTH = 0.001


def _vec(values: Sequence[float], size: int) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(size)


@dataclass
class ParticleProps:
    """Parameters of a particle to emit."""

    position: np.ndarray
    velocity: np.ndarray
    color_begin: np.ndarray
    color_end: np.ndarray
    size_begin: float
    size_end: float
    life_time: float
    velocity_variation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    size_variation: float = 0.0
    stretch: float = 1.0
    stretch_variation: float = 0.0

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3)
        self.velocity = _vec(self.velocity, 3)
        self.velocity_variation = _vec(self.velocity_variation, 3)
        self.direction = _vec(self.direction, 3)
        self.color_begin = _vec(self.color_begin, 4)
        self.color_end = _vec(self.color_end, 4)


@dataclass
class _Particle:
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    color_begin: np.ndarray = field(default_factory=lambda: np.zeros(4))
    color_end: np.ndarray = field(default_factory=lambda: np.zeros(4))
    size_begin: float = 0.0
    size_end: float = 0.0
    stretch: float = 1.0
    life_time: float = 0.0
    life_remaining: float = 0.0
    active: bool = False


class ParticleSystem:
    """Ring pool of particles; new emissions overwrite the oldest slot."""

    def __init__(self, max_particles: int = 10000, rng: Optional[random.Random] = None) -> None:
        if max_particles <= 0:
            raise ValueError("max_particles must be positive")
        self._pool: List[_Particle] = [_Particle() for _ in range(max_particles)]
        self._pool_index = max_particles - 1
        self._rng = rng if rng is not None else random.Random()

    @property
    def capacity(self) -> int:
        return len(self._pool)

    @property
    def active_count(self) -> int:
        return sum(1 for p in self._pool if p.active)

    def update(self, delta_time: float) -> None:
        """Age and move live particles; expired ones are retired on the next update."""
        for particle in self._pool:
            if not particle.active:
                continue
            if particle.life_remaining <= 0.0:
                particle.active = False
                continue
            particle.life_remaining -= delta_time
            particle.position = particle.position + particle.velocity * delta_time

    def emit(self, props: ParticleProps) -> None:
        """Spawn one particle from ``props`` with random variation applied."""
        particle = self._pool[self._pool_index]
        particle.active = True
        particle.position = props.position.copy()

        variation = np.array([self._random() - 0.5 for _ in range(3)])
        particle.velocity = props.velocity + props.velocity_variation * variation

        particle.color_begin = props.color_begin.copy()
        particle.color_end = props.color_end.copy()

        particle.life_time = props.life_time
        particle.life_remaining = props.life_time

        length = float(np.linalg.norm(props.direction))
        if length < _MIN_DIRECTION_LENGTH:
            particle.direction = np.array([0.0, 1.0, 0.0])
        else:
            particle.direction = props.direction / length

        particle.size_begin = props.size_begin + props.size_variation * (self._random() - 0.5)
        particle.size_end = props.size_end
        particle.stretch = max(1.0, props.stretch + props.stretch_variation * (self._random() - 0.5))

        self._pool_index = len(self._pool) - 1 if self._pool_index == 0 else self._pool_index - 1

    def gpu_data(self) -> np.ndarray:
        """Per live particle: position+size, direction+stretch, colour; shape (n, 12)."""
        rows = []
        for particle in self._pool:
            if not particle.active:
                continue
            if particle.life_time > 0.0:
                t = 1.0 - particle.life_remaining / particle.life_time
            else:
                t = 1.0
            size = particle.size_begin * (1.0 - t) + particle.size_end * t
            color = particle.color_begin * (1.0 - t) + particle.color_end * t
            rows.append(
                np.concatenate(
                    [particle.position, [size], particle.direction, [particle.stretch], color]
                )
            )
        if not rows:
            return np.zeros((0, 12))
        return np.vstack(rows)

    def _random(self) -> float:
        return self._rng.random()
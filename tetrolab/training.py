"""Genetic training schedule: phases and the evolver settings for each."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GAMES_PER_INDIVIDUAL = 3
TURN_LIMIT = 3000
POPULATION_COUNT = 30
MAX_GENERATIONS = 200
ELITE_COUNT = 2
TOURNAMENT_SIZE = 2
MUTATION_RATE = 0.3
BLX_ALPHA = 0.2


class EvolutionPhase(Enum):
    """Stage of training, from broad search to fine tuning."""

    EXPLORATION = "exploration"
    TRANSITION = "transition"
    CONVERGENCE = "convergence"

    @classmethod
    def from_generation(cls, generation: int) -> "EvolutionPhase":
        """Phase for a 0-based generation number."""
        if generation < 0:
            raise ValueError(f"generation {generation} is negative")
        if generation < 30:
            return cls.EXPLORATION
        if generation < 80:
            return cls.TRANSITION
        return cls.CONVERGENCE


_MAX_WEIGHT = {
    EvolutionPhase.EXPLORATION: 0.5,
    EvolutionPhase.TRANSITION: 0.8,
    EvolutionPhase.CONVERGENCE: 1.0,
}

_MUTATION_SIGMA = {
    EvolutionPhase.EXPLORATION: 0.05,
    EvolutionPhase.TRANSITION: 0.02,
    EvolutionPhase.CONVERGENCE: 0.01,
}


def max_weight_by_phase(phase: EvolutionPhase) -> float:
    """Largest weight an individual may hold in this phase."""
    return _MAX_WEIGHT[phase]


def mutation_sigma_by_phase(phase: EvolutionPhase) -> float:
    """Standard deviation of weight mutations in this phase."""
    return _MUTATION_SIGMA[phase]


@dataclass(frozen=True)
class EvolverParams:
    """Settings for producing one generation from the previous one."""

    elite_count: int
    tournament_size: int
    max_weight: float
    mutation_sigma: float
    blx_alpha: float
    mutation_rate: float


def evolver_by_phase(phase: EvolutionPhase) -> EvolverParams:
    """Evolver settings for a training phase."""
    return EvolverParams(
        elite_count=ELITE_COUNT,
        tournament_size=TOURNAMENT_SIZE,
        max_weight=max_weight_by_phase(phase),
        mutation_sigma=mutation_sigma_by_phase(phase),
        blx_alpha=BLX_ALPHA,
        mutation_rate=MUTATION_RATE,
    )
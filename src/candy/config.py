from dataclasses import dataclass

from candy.constants import (
    CASCADE_STEP_DELAY,
    REVERSE_SWAP_ANIMATION_DELAY,
    REVERSE_SWAP_OBSERVE_DELAY,
    REVERSE_SWAP_PREP_DELAY,
    SWAP_ANIMATION_DELAY,
)


@dataclass(slots=True)
class CascadeTiming:
    """Animation pacing for the swap and cascade sequences, in seconds."""

    swap: float = SWAP_ANIMATION_DELAY
    reverse_prep: float = REVERSE_SWAP_PREP_DELAY
    reverse_observe: float = REVERSE_SWAP_OBSERVE_DELAY
    reverse: float = REVERSE_SWAP_ANIMATION_DELAY
    cascade_step: float = CASCADE_STEP_DELAY

    def __post_init__(self) -> None:
        for name in ('swap', 'reverse_prep', 'reverse_observe', 'reverse', 'cascade_step'):
            value = float(getattr(self, name))
            if value < 0.0:
                raise ValueError(f"{name} delay must be non-negative, got {value}")
            setattr(self, name, value)

    @property
    def revert_total(self) -> float:
        return self.reverse_prep + self.reverse_observe + self.reverse

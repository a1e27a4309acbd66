"""Tunable engine rules.

Classic interpreters of this format disagree on a few light and hazard
details. These are the knobs for them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineSettings:
    # Warn once the remaining light drops below this many turns
    light_warning_threshold: int = 25
    # Remove the light source from play when it runs out
    destroy_exhausted_light: bool = True
    # Percent chance of a fatal fall when moving in the dark
    dark_fall_chance: int = 25
    # Pause length for the DELAY command
    delay_seconds: float = 2.0

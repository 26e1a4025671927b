"""Settings for a game session (clock)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MINUTES_PER_SIDE = 10
MIN_MINUTES_PER_SIDE = 1
MAX_MINUTES_PER_SIDE = 60


class ClockConfig(BaseModel):
    """
    Time control of a game.
    ---
    Minutes outside of [1, 60] are clamped instead of rejected, just like the timer input does in the UI.
    """

    model_config = ConfigDict(frozen=True)

    minutes_per_side: int = DEFAULT_MINUTES_PER_SIDE
    tick_interval_seconds: float = Field(default=1.0, gt=0)

    @field_validator("minutes_per_side")
    @classmethod
    def clamp_minutes(cls, value: int) -> int:
        return max(MIN_MINUTES_PER_SIDE, min(MAX_MINUTES_PER_SIDE, value))

    @property
    def seconds_per_side(self) -> int:
        return self.minutes_per_side * 60

"""Charger configuration — grid connection and load-sharing strategy.

The strategy is a tagged union on ``kind``:

  exclusive  one plug, whole grid connection for its occupant
  paired     N plugs, an idle neighbour doubles the per-plug share
  split      N plugs, flat grid / N
  granular   N plugs, power handed out in whole steps up to a per-plug cap
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

# Below this a session is not worth holding a plug; every request is lifted to it.
MIN_CHARGE_POWER_KW = 5.0


class ExclusiveStrategy(BaseModel):
    """Single plug, full grid connection."""

    kind: Literal["exclusive"] = "exclusive"

    @property
    def number_of_plugs(self) -> int:
        return 1


class PairedStrategy(BaseModel):
    """Adjacent-pair boosting: double share while more than half the plugs are free."""

    kind: Literal["paired"] = "paired"
    number_of_plugs: int = Field(default=2, ge=1, description="Plugs sharing the grid connection")


class SplitStrategy(BaseModel):
    """Flat even division of the grid connection."""

    kind: Literal["split"] = "split"
    number_of_plugs: int = Field(default=2, ge=1, description="Plugs sharing the grid connection")


class GranularStrategy(BaseModel):
    """Power allocated in whole ``power_step_kw`` steps, capped per plug."""

    kind: Literal["granular"] = "granular"
    number_of_plugs: int = Field(default=8, ge=1, description="Plugs sharing the grid connection")
    power_step_kw: float = Field(default=25.0, gt=0, description="Allocation granularity (kW)")
    max_per_plug_kw: float = Field(default=400.0, gt=0, description="Ceiling for any single plug (kW)")

    @model_validator(mode="after")
    def _check_step(self) -> GranularStrategy:
        if self.max_per_plug_kw < self.power_step_kw:
            raise ValueError(
                f"max_per_plug_kw ({self.max_per_plug_kw}) must be at least "
                f"power_step_kw ({self.power_step_kw})"
            )
        return self


LoadSharingStrategy = Annotated[
    Union[ExclusiveStrategy, PairedStrategy, SplitStrategy, GranularStrategy],
    Field(discriminator="kind"),
]


class ChargerConfig(BaseModel):
    """One charger site: grid connection plus load-sharing policy."""

    name: str = Field(default="DC Fast Charger", description="Human label")
    grid_connection_kw: float = Field(default=600.0, gt=0, description="Grid connection ceiling (kW)")
    strategy: LoadSharingStrategy = Field(default_factory=ExclusiveStrategy)

    @model_validator(mode="after")
    def _check_granular_budget(self) -> ChargerConfig:
        s = self.strategy
        if isinstance(s, GranularStrategy):
            check_granular_budget(int(self.grid_connection_kw * 1_000), int(s.power_step_kw * 1_000))
        return self


def check_granular_budget(grid_w: int, step_w: int) -> None:
    """Raise ``ValueError`` if the whole-step budget cannot cover one minimum-rate request.

    Such a charger would hold every occupant at 0 W and never finish.
    """
    if step_w <= 0:
        raise ValueError(f"granular power step must be positive, got {step_w} W")
    budget_steps = grid_w // step_w
    floor_steps = -(-int(MIN_CHARGE_POWER_KW * 1_000) // step_w)
    if budget_steps < floor_steps:
        raise ValueError(
            f"granular budget of {budget_steps * step_w / 1_000} kW cannot cover the "
            f"{MIN_CHARGE_POWER_KW} kW minimum charge rate"
        )

"""Immutable step state for the savings wizard."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from typing import Any

from .calculator import CabinAge, CalculatorInputs, PriceMode

STEPS = ("intro", "location", "size", "age", "price", "result")

HEADINGS = {
    "intro": "Hvor mye kan jeg spare?",
    "location": "Hvor ligger fritidsboligen?",
    "size": "Hvor stor er fritidsboligen?",
    "age": "Hvor gammel er fritidsboligen?",
    "price": "Hvilken strømpris skal vi bruke?",
    "result": "Din estimerte vinterbesparelse",
}

SUBTITLES = {
    "intro": "Få et raskt estimat basert på hyttens plassering og størrelse.",
    "location": "Søk etter adresse eller stedsnavn.",
    "size": None,
    "age": "Vi bruker dette til å anslå hvor mye energi som trengs til frostsikring.",
    "price": "Velg Norgespris (0,50 kr/kWh) eller legg inn egen pris.",
    "result": "Basert på værdata og størrelsen på fritidsboligen.",
}


@dataclass(frozen=True)
class WizardState:
    step: str = STEPS[0]
    location_name: str | None = None
    location_lat: float | None = None
    location_lon: float | None = None
    winter_months: int | None = None
    floor_area_m2: float | None = None
    cabin_age_class: CabinAge | None = None
    price_mode: PriceMode | None = None
    custom_price_per_kwh: float | None = None

    @property
    def step_index(self) -> int:
        return STEPS.index(self.step)

    def advance(self) -> WizardState:
        index = min(self.step_index + 1, len(STEPS) - 1)
        return replace(self, step=STEPS[index])

    def back(self) -> WizardState:
        index = max(self.step_index - 1, 0)
        return replace(self, step=STEPS[index])

    def go_to(self, step: str) -> WizardState:
        if step not in STEPS:
            raise ValueError(f"Unknown wizard step: {step}")
        return replace(self, step=step)

    def with_answers(self, **answers: Any) -> WizardState:
        return replace(self, **answers)

    def select_location(self, name: str, lat: float, lon: float, winter_months: int | None = None) -> WizardState:
        return replace(
            self,
            location_name=name,
            location_lat=lat,
            location_lon=lon,
            winter_months=winter_months,
        )

    def reset(self) -> WizardState:
        return WizardState()

    def inputs(self) -> CalculatorInputs:
        return CalculatorInputs(
            winter_months=self.winter_months,
            floor_area_m2=self.floor_area_m2,
            cabin_age_class=self.cabin_age_class,
            price_mode=self.price_mode,
            custom_price_per_kwh=self.custom_price_per_kwh,
        )


def step_label(state: WizardState) -> str:
    return f"Steg {state.step_index + 1}/{len(STEPS)}"


def can_continue(state: WizardState) -> bool:
    """Whether the current step has the answers it needs."""

    if state.step == "location":
        return bool(state.location_name and (state.winter_months or 0) > 0)
    if state.step == "size":
        return (state.floor_area_m2 or 0) > 0
    if state.step == "age":
        return state.cabin_age_class is not None
    if state.step == "price":
        if state.price_mode == PriceMode.CUSTOM:
            return (state.custom_price_per_kwh or 0) > 0
        return state.price_mode is not None
    return True


class LookupSequencer:
    """Hands out tokens so only the newest lookup may apply its result.

    Each new query calls :meth:`issue`; when a lookup completes, its
    result is applied only if :meth:`is_current` still holds for its token.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0

    def issue(self) -> int:
        self._latest = next(self._counter)
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def apply(self, token: int, result: Any, current: Any) -> Any:
        """Return ``result`` for the latest token, otherwise keep ``current``."""

        return result if self.is_current(token) else current

    def visible(self, stored: tuple[int, Any] | None, default: Any) -> Any:
        """Unpack a ``(token, result)`` pair kept between reruns.

        Results stored under an older token are hidden behind ``default``.
        """

        if stored is None:
            return default
        token, result = stored
        return result if self.is_current(token) else default

"""Pydantic schema for the savings calculation."""

from pydantic import BaseModel, ConfigDict, Field

from cabin_savings.calculator import SavingsResult


class Savings(BaseModel):
    """Estimated saving along with the energy figures that explain it."""
    model_config = ConfigDict(populate_by_name=True)

    estimated_saving_kr: float = Field(alias="estimatedSavingKr", ge=0)
    frost_protection_kwh: float = Field(alias="frostProtectionKwh")
    pads_energy_kwh: float = Field(alias="padsEnergyKwh")

    @classmethod
    def from_result(cls, result: SavingsResult) -> "Savings":
        return cls(
            estimated_saving_kr=result.estimated_saving_kr,
            frost_protection_kwh=result.frost_protection_kwh,
            pads_energy_kwh=result.pads_energy_kwh,
        )

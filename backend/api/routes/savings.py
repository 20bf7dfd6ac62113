"""Savings calculation route."""

from fastapi import APIRouter, Query

from backend.models.savings import Savings
from cabin_savings.calculator import CabinAge, CalculatorInputs, PriceMode, compute

router = APIRouter()


@router.get("", response_model=Savings)
def savings(
    winter_months: int | None = Query(None, description="Length of the frost season"),
    floor_area_m2: float | None = Query(None, description="Heated floor area (m²)"),
    cabin_age_class: CabinAge | None = Query(None, description="Construction era: new, normal or old"),
    price_mode: PriceMode | None = Query(None, description="standard or custom"),
    custom_price_per_kwh: float | None = Query(None, description="Own price in kr/kWh"),
) -> Savings:
    """Estimate the winter saving. Missing inputs give a zero result."""
    inputs = CalculatorInputs(
        winter_months=winter_months,
        floor_area_m2=floor_area_m2,
        cabin_age_class=cabin_age_class,
        price_mode=price_mode,
        custom_price_per_kwh=custom_price_per_kwh,
    )
    return Savings.from_result(compute(inputs))

"""Streamlit wizard for the cabin winter savings API."""

from __future__ import annotations

import os
from typing import Any

import httpx
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from cabin_savings import DEFAULT_WINTER_MONTHS
from cabin_savings.calculator import (
    DEFAULT_PRICE_PER_KWH,
    CabinAge,
    PriceMode,
    SavingsResult,
    compute,
    effective_price,
)
from cabin_savings.wizard import (
    HEADINGS,
    SUBTITLES,
    LookupSequencer,
    WizardState,
    can_continue,
    step_label,
)

DEFAULT_API_BASE = "http://localhost:8000"
AGE_OPTIONS = {
    "Ny (bygget etter 2010)": CabinAge.NEW,
    "Normal (1980–2010)": CabinAge.NORMAL,
    "Eldre (før 1980)": CabinAge.OLD,
}
PRICE_OPTIONS = {
    f"Norgespris ({DEFAULT_PRICE_PER_KWH:.2f} kr/kWh)".replace(".", ","): PriceMode.STANDARD,
    "Egen pris": PriceMode.CUSTOM,
}


def get_api_base() -> str:
    """Prefer Streamlit secrets/env var overrides for API base URL."""
    # Streamlit raises when no secrets file exists, so guard the lookup.
    secret_value: str | None = None
    try:
        secret_value = st.secrets["api_base"]
    except Exception:  # noqa: BLE001 - secrets module raises custom errors
        secret_value = None

    env_value = os.environ.get("API_BASE_URL")
    return secret_value or env_value or DEFAULT_API_BASE


def _request_api(path: str, params: dict[str, Any]) -> Any:
    base_url = get_api_base().rstrip("/")
    url = f"{base_url}{path}"
    with httpx.Client(timeout=30, follow_redirects=True) as client:
        response = client.get(url, params=params)
        response.raise_for_status()
        return response.json()


@st.cache_data(ttl=600, show_spinner=False)
def search_places(query: str) -> list[dict[str, Any]]:
    """Look up location candidates for the location step."""
    payload = _request_api("/geocode", {"q": query})
    return payload if isinstance(payload, list) else []


@st.cache_data(ttl=3600, show_spinner=False)
def fetch_frost(lat: float, lon: float) -> dict[str, Any]:
    """Fetch the suggested winter length for a location."""
    return _request_api("/frost", {"lat": lat, "lon": lon})


def format_kr(value: float) -> str:
    return f"{value:,.0f} kr".replace(",", " ")


def _state() -> WizardState:
    return st.session_state["wizard"]


def _set_state(state: WizardState) -> None:
    st.session_state["wizard"] = state


def _nav_buttons(state: WizardState, next_label: str = "Neste") -> None:
    back_col, next_col = st.columns(2)
    if back_col.button("Tilbake", use_container_width=True):
        _set_state(state.back())
        st.rerun()
    if next_col.button(next_label, disabled=not can_continue(state), type="primary", use_container_width=True):
        _set_state(state.advance())
        st.rerun()


def render_location(state: WizardState) -> None:
    sequencer: LookupSequencer = st.session_state["lookups"]
    query = st.text_input(
        "Hvor ligger fritidsboligen?",
        placeholder="Søk f.eks. Beitostølen",
    ).strip()

    if query != st.session_state.get("lookup_query"):
        st.session_state["lookup_query"] = query
        st.session_state["lookup_token"] = sequencer.issue()
    token = st.session_state["lookup_token"]

    stored = st.session_state.get("lookup_result")
    if query and sequencer.visible(stored, None) is None:
        with st.spinner("Søker..."):
            try:
                found = search_places(query)
            except httpx.HTTPError as exc:
                st.warning(f"Søket feilet: {exc}")
            else:
                stored = sequencer.apply(token, (token, found), stored)
                st.session_state["lookup_result"] = stored
    results: list[dict[str, Any]] = sequencer.visible(stored, [])

    if results:
        labels = [place["name"] for place in results]
        choice = st.radio("Velg sted", labels, index=None)
        if choice is not None:
            place = results[labels.index(choice)]
            if place["name"] != state.location_name:
                select_place(state, place)
                state = _state()
    elif query:
        st.info("Fant ingen steder som passer søket.")

    if state.location_name:
        st.success(f"Valgt: {state.location_name}")
        months = st.number_input(
            "Vintermåneder",
            min_value=1,
            max_value=7,
            value=state.winter_months or DEFAULT_WINTER_MONTHS,
            step=1,
        )
        if months != state.winter_months:
            _set_state(state.with_answers(winter_months=int(months)))
            state = _state()

    note = st.session_state.get("frost_note")
    if note:
        st.caption(note)

    _nav_buttons(state)


def select_place(state: WizardState, place: dict[str, Any]) -> None:
    _set_state(state.select_location(place["name"], place["lat"], place["lon"]))
    try:
        frost = fetch_frost(place["lat"], place["lon"])
    except httpx.HTTPError:
        st.session_state["frost_note"] = "Kunne ikke hente vintermåneder nå."
        _set_state(_state().with_answers(winter_months=DEFAULT_WINTER_MONTHS))
        return

    months = frost.get("suggestedWinterMonths")
    if not isinstance(months, int):
        months = DEFAULT_WINTER_MONTHS
    _set_state(_state().with_answers(winter_months=months))
    st.session_state["frost_note"] = f"Basert på værdata foreslår vi {months} vintermåneder. {frost.get('note', '')}"


def render_size(state: WizardState) -> None:
    area = st.number_input(
        "Oppvarmet areal (m²)",
        min_value=0.0,
        value=float(state.floor_area_m2 or 0.0),
        step=5.0,
    )
    if area != (state.floor_area_m2 or 0.0):
        state = state.with_answers(floor_area_m2=area or None)
        _set_state(state)
    _nav_buttons(state)


def render_age(state: WizardState) -> None:
    labels = list(AGE_OPTIONS)
    current = next((i for i, age in enumerate(AGE_OPTIONS.values()) if age == state.cabin_age_class), None)
    choice = st.radio("Byggeår", labels, index=current)
    if choice is not None and AGE_OPTIONS[choice] != state.cabin_age_class:
        state = state.with_answers(cabin_age_class=AGE_OPTIONS[choice])
        _set_state(state)
    _nav_buttons(state)


def render_price(state: WizardState) -> None:
    labels = list(PRICE_OPTIONS)
    current = next((i for i, mode in enumerate(PRICE_OPTIONS.values()) if mode == state.price_mode), None)
    choice = st.radio("Strømpris", labels, index=current)
    if choice is not None and PRICE_OPTIONS[choice] != state.price_mode:
        state = state.with_answers(price_mode=PRICE_OPTIONS[choice])
        _set_state(state)

    if state.price_mode == PriceMode.CUSTOM:
        price = st.number_input(
            "Din pris (kr/kWh)",
            min_value=0.0,
            value=float(state.custom_price_per_kwh or 0.0),
            step=0.05,
        )
        if price != (state.custom_price_per_kwh or 0.0):
            state = state.with_answers(custom_price_per_kwh=price or None)
            _set_state(state)

    _nav_buttons(state, next_label="Se resultat")


def breakdown_frame(state: WizardState, result: SavingsResult) -> pd.DataFrame:
    price = effective_price(state.price_mode, state.custom_price_per_kwh)
    rows = [
        ("Frostsikring med vanlig oppvarming", result.frost_protection_kwh, result.frost_protection_kwh * price),
        ("Varmematter (3 × 20 W)", result.pads_energy_kwh, result.pads_energy_kwh * price),
    ]
    return pd.DataFrame(rows, columns=["Løsning", "kWh per vinter", "Kostnad (kr)"])


def energy_chart(result: SavingsResult) -> go.Figure:
    fig = go.Figure(
        go.Bar(
            x=["Vanlig oppvarming", "Varmematter"],
            y=[result.frost_protection_kwh, result.pads_energy_kwh],
            marker_color=["#c0392b", "#27ae60"],
            text=[f"{result.frost_protection_kwh:,.0f}", f"{result.pads_energy_kwh:,.0f}"],
            textposition="auto",
        )
    )
    fig.update_layout(yaxis_title="kWh per vinter", height=320, margin=dict(t=20, b=20))
    return fig


def render_result(state: WizardState) -> None:
    result = compute(state.inputs())
    st.metric("Estimert besparelse", format_kr(result.estimated_saving_kr))
    st.caption(
        f"{state.location_name or 'Ukjent sted'} · {state.winter_months or '–'} vintermåneder · "
        f"{state.floor_area_m2 or 0:.0f} m²"
    )
    st.plotly_chart(energy_chart(result), use_container_width=True)
    st.dataframe(breakdown_frame(state, result), hide_index=True, use_container_width=True)

    back_col, restart_col = st.columns(2)
    if back_col.button("Tilbake", use_container_width=True):
        _set_state(state.back())
        st.rerun()
    if restart_col.button("Start på nytt", use_container_width=True):
        st.session_state.pop("frost_note", None)
        _set_state(state.reset())
        st.rerun()


RENDERERS = {
    "location": render_location,
    "size": render_size,
    "age": render_age,
    "price": render_price,
    "result": render_result,
}


def main() -> None:
    st.set_page_config(page_title="SHS varmematter – sparekalkulator", layout="centered")
    st.session_state.setdefault("wizard", WizardState())
    st.session_state.setdefault("lookups", LookupSequencer())

    state = _state()
    st.caption(step_label(state))
    st.title(HEADINGS[state.step])
    if SUBTITLES[state.step]:
        st.write(SUBTITLES[state.step])

    if state.step == "intro":
        if st.button("Start", type="primary"):
            _set_state(state.advance())
            st.rerun()
        return

    RENDERERS[state.step](state)


if __name__ == "__main__":
    main()

import httpx
import pytest

from cabin_savings.winter import build_period


def test_healthcheck(api):
    client, _ = api(lambda request: httpx.Response(500))

    assert client.get("/health").json() == {"status": "ok"}


def test_geocode_empty_query_returns_empty_list(api):
    client, transport = api(lambda request: httpx.Response(500))

    response = client.get("/geocode", params={"q": ""})

    assert response.status_code == 200
    assert response.json() == []
    assert transport.requests == []


def test_geocode_live_results_are_deduplicated(api):
    rows = [
        {"lat": "60.53300", "lon": "8.20500", "display_name": "Geilo, Hol, Buskerud, Norge"},
        {"lat": "60.533004", "lon": "8.204996", "display_name": "geilo, hol, buskerud, norge"},
        {"lat": "60.40000", "lon": "8.10000", "address": {"road": "Geilovegen", "house_number": "3", "country": "Norge"}},
    ]
    client, _ = api(lambda request: httpx.Response(200, json=rows))

    response = client.get("/geocode", params={"q": "geilo"})

    assert response.status_code == 200
    assert response.json() == [
        {"name": "Geilo, Hol, Buskerud, Norge", "lat": 60.533, "lon": 8.205},
        {"name": "Geilovegen 3, Norge", "lat": 60.4, "lon": 8.1},
    ]


def test_geocode_fallback_when_provider_down(api):
    client, _ = api(lambda request: httpx.Response(502))

    response = client.get("/geocode", params={"q": "tromsø"})

    assert response.json() == [{"name": "Tromsø", "lat": 69.6492, "lon": 18.9553}]


@pytest.mark.parametrize(
    ("params", "error"),
    [
        ({}, "lat og lon kreves"),
        ({"lat": "61.2"}, "lat og lon kreves"),
        ({"lat": "61.2", "lon": ""}, "lat og lon kreves"),
        ({"lat": "abc", "lon": "8.9"}, "Ugyldige koordinater"),
        ({"lat": "61.2", "lon": "inf"}, "Ugyldige koordinater"),
        ({"lat": "nan", "lon": "8.9"}, "Ugyldige koordinater"),
    ],
)
def test_frost_rejects_bad_coordinates(api, params, error):
    client, transport = api(lambda request: httpx.Response(500))

    response = client.get("/frost", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": error}
    assert transport.requests == []


def test_frost_success_payload(api):
    temps = [-6.0] * 130 + [1.0] * 21
    days = [f"d{i}" for i in range(len(temps))]
    client, _ = api(
        lambda request: httpx.Response(200, json={"daily": {"time": days, "temperature_2m_mean": temps}})
    )

    response = client.get("/frost", params={"lat": "61.2489", "lon": "8.9091"})

    period = build_period()
    assert response.status_code == 200
    assert response.json() == {
        "suggestedWinterMonths": 4,
        "frostDaysCount": 130,
        "period": {"from": period.start.isoformat(), "to": period.end.isoformat()},
        "note": "Basert på døgnmiddeltemperatur ≤ 0 °C for valgt område.",
    }


def test_frost_upstream_failure_still_answers_200(api):
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    client, _ = api(handler)

    response = client.get("/frost", params={"lat": "61.2", "lon": "8.9"})

    assert response.status_code == 200
    body = response.json()
    assert body["suggestedWinterMonths"] == 4
    assert body["frostDaysCount"] is None
    assert body["note"].startswith("Feil ved henting")


def test_savings_reference_case(api):
    client, _ = api(lambda request: httpx.Response(500))

    response = client.get(
        "/savings",
        params={"winter_months": 4, "floor_area_m2": 100, "cabin_age_class": "normal", "price_mode": "standard"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["frostProtectionKwh"] == pytest.approx(7500)
    assert body["padsEnergyKwh"] == pytest.approx(172.8)
    assert body["estimatedSavingKr"] == pytest.approx(3663.6)


def test_savings_incomplete_inputs_give_zero(api):
    client, _ = api(lambda request: httpx.Response(500))

    response = client.get("/savings", params={"floor_area_m2": 40})

    assert response.json() == {"estimatedSavingKr": 0.0, "frostProtectionKwh": 0.0, "padsEnergyKwh": 0.0}


def test_geocode_row_with_string_address_does_not_fail(api):
    rows = [{"lat": "60.5", "lon": "8.2", "display_name": "Geilo, Hol", "address": "Geilo"}]
    client, _ = api(lambda request: httpx.Response(200, json=rows))

    response = client.get("/geocode", params={"q": "geilo"})

    assert response.status_code == 200
    assert response.json() == [{"name": "Geilo, Hol", "lat": 60.5, "lon": 8.2}]


def test_frost_oversized_upstream_number_still_answers_200(api):
    body = '{"daily": {"time": ["2024-11-01"], "temperature_2m_mean": [1' + "0" * 400 + "]}}"
    client, _ = api(lambda request: httpx.Response(200, text=body))

    response = client.get("/frost", params={"lat": "61.2", "lon": "8.9"})

    assert response.status_code == 200
    assert response.json()["suggestedWinterMonths"] == 4
    assert response.json()["frostDaysCount"] == 0


@pytest.mark.parametrize("params", [{"lat": "6_1", "lon": "8.9"}, {"lat": "61.2", "lon": "8_9"}])
def test_frost_rejects_digit_separators(api, params):
    client, transport = api(lambda request: httpx.Response(500))

    response = client.get("/frost", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": "Ugyldige koordinater"}
    assert transport.requests == []


@pytest.mark.parametrize(
    "params",
    [
        {"winter_months": 0, "floor_area_m2": 100},
        {"winter_months": 12, "floor_area_m2": -5},
        {"winter_months": 4, "floor_area_m2": 0, "custom_price_per_kwh": -1, "price_mode": "custom"},
    ],
)
def test_savings_out_of_range_inputs_never_fail(api, params):
    client, _ = api(lambda request: httpx.Response(500))

    response = client.get("/savings", params=params)

    assert response.status_code == 200
    assert response.json()["estimatedSavingKr"] == 0.0

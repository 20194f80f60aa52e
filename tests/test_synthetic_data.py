import random
from datetime import datetime, timedelta, timezone

import pytest

import synthetic_data
from severity import heatwave_risk

DHAKA = ("Dhaka", 23.8103, 90.4125)


class FixedRandom:
    """Stand-in for `random` that lands every draw at the same spot of its range."""

    def __init__(self, fraction=0.0, integer=None):
        self.fraction = fraction
        self.integer = integer

    def uniform(self, a, b):
        return a + (b - a) * self.fraction

    def randint(self, a, b):
        if self.integer is None:
            return a + int((b - a) * self.fraction)
        return min(max(self.integer, a), b)

    def choice(self, seq):
        return seq[0]


def test_heatwave_payload_shape_and_ranges():
    for seed in range(25):
        payload = synthetic_data.get_heatwave(*DHAKA, rng=random.Random(seed))
        current = payload["current"]

        assert payload["location"] == "Dhaka"
        assert payload["coordinates"] == {"lat": 23.8103, "lon": 90.4125}
        assert 35 <= current["temperature"] <= 45
        assert 5 <= round(current["heatIndex"] - current["temperature"], 1) <= 10
        assert current["riskLevel"] == heatwave_risk(current["heatIndex"])
        assert 1 <= current["daysInHeatwave"] <= 14
        assert len(current["forecast"]) == 5
        for day in current["forecast"]:
            assert abs(day - current["temperature"]) <= 3.05
        historical = payload["historical"]
        assert len(historical["years"]) == 6
        assert len(historical["maxTemperatures"]) == len(historical["heatwaveDays"]) == 6
        assert "lastUpdated" in payload


def test_heatwave_alert_follows_risk_level():
    for seed in range(25):
        payload = synthetic_data.get_heatwave(*DHAKA, rng=random.Random(seed))
        expected = 1 if payload["current"]["riskLevel"] == "high" else 0
        assert len(payload["alerts"]) == expected
        for alert in payload["alerts"]:
            assert alert["type"] == "warning"
            assert alert["id"] == 1


def test_heatwave_history_warms_over_time():
    payload = synthetic_data.get_heatwave(*DHAKA, rng=FixedRandom(0.5))
    temps = payload["historical"]["maxTemperatures"]
    assert temps == sorted(temps)
    assert temps[1] - temps[0] == pytest.approx(1.2, abs=0.05)


@pytest.mark.parametrize("probability", range(10, 70))
def test_flood_forecast_offsets_and_clamps(probability):
    rainfall = 60.3
    forecast = synthetic_data.flood_forecast(probability, rainfall)

    assert [day["day"] for day in forecast] == ["Today", "Tomorrow", "Day 3", "Day 4", "Day 5"]
    assert forecast[0]["probability"] == probability
    assert forecast[1]["probability"] == min(probability + 7, 85)
    assert forecast[2]["probability"] == max(probability - 7, 5)
    assert forecast[3]["probability"] == max(probability - 20, 3)
    assert forecast[4]["probability"] == max(probability - 13, 7)
    assert forecast[1]["rainfall"] == pytest.approx(rainfall + 16.7)
    assert forecast[2]["rainfall"] == pytest.approx(rainfall - 14.4)
    assert forecast[3]["rainfall"] == pytest.approx(rainfall - 26.9)
    assert forecast[4]["rainfall"] == pytest.approx(rainfall - 20.2)


@pytest.mark.parametrize("probability, alerts", [(40, 0), (41, 1), (10, 0), (69, 1)])
def test_flood_alert_threshold(probability, alerts):
    payload = synthetic_data.get_flood(*DHAKA, rng=FixedRandom(0.5, integer=probability))
    assert payload["current"]["floodProbability"] == probability
    assert len(payload["alerts"]) == alerts


def test_flood_ranges():
    for seed in range(25):
        current = synthetic_data.get_flood(*DHAKA, rng=random.Random(seed))["current"]
        assert 10 <= current["floodProbability"] < 70
        assert 3.5 <= current["waterLevel"] <= 5.5
        assert 45.6 <= current["rainfall24h"] <= 75.6
        assert 0 <= current["activeFloods"] <= 3


def test_soil_always_emits_one_info_alert():
    for seed in range(25):
        payload = synthetic_data.get_soil(*DHAKA, rng=random.Random(seed))
        assert len(payload["alerts"]) == 1
        alert = payload["alerts"][0]
        assert alert["type"] == "info"
        if payload["current"]["healthScore"] > 75:
            assert "optimal" in alert["message"]
        else:
            assert "improvement" in alert["message"]


def test_soil_ranges():
    for seed in range(25):
        payload = synthetic_data.get_soil(*DHAKA, rng=random.Random(seed))
        current = payload["current"]

        assert 6.6 <= current["ph"] <= 7.0
        assert 2.9 <= current["organicMatter"] <= 3.5
        assert 40 <= current["nitrogen"] <= 54
        assert 20 <= current["phosphorus"] <= 34
        assert 170 <= current["potassium"] <= 194
        assert 20 <= current["moisture"] <= 35
        assert 16 <= current["temperature"] <= 24
        assert current["fertility"] in {"low", "moderate", "high"}

        composition = payload["composition"]
        assert 35 <= composition["sand"] <= 49
        assert 25 <= composition["clay"] <= 39
        assert 30 <= composition["silt"] <= 44

        historical = payload["historical"]
        for series in ("phLevels", "organicMatter", "nitrogen", "phosphorus", "potassium"):
            assert len(historical[series]) == len(historical["years"]) == 6
        assert all(6.6 <= ph <= 7.0 for ph in historical["phLevels"])
        assert all(170 <= k <= 194 for k in historical["potassium"])


def test_soil_health_score():
    assert synthetic_data.soil_health_score(6.8, 4.0, 50, 30, 180) == 100
    # pH outside the neutral band loses 40 points per unit of distance from 6.75
    assert synthetic_data.soil_health_score(8.75, 4.0, 50, 30, 180) == round((20 + 100 + 100) / 3)


def test_soil_composition_is_not_normalised():
    # Sand, clay and silt are drawn independently; their total is not 100.
    payload = synthetic_data.get_soil(*DHAKA, rng=FixedRandom(0.0))
    composition = payload["composition"]
    assert composition == {"sand": 35, "clay": 25, "silt": 30}
    assert sum(composition.values()) != 100


def test_earthquake_events_sorted_newest_first():
    for seed in range(25):
        payload = synthetic_data.get_earthquake(*DHAKA, rng=random.Random(seed))
        recent = payload["recent"]
        assert 1 <= len(recent) <= 4
        times = [event["time"] for event in recent]
        assert times == sorted(times, reverse=True)
        for event in recent:
            assert 2.5 <= event["magnitude"] <= 4.0
            assert event["location"] in synthetic_data.EARTHQUAKE_PLACES
        assert len(payload["historical"]["monthlyEvents"]) == 12
        assert payload["historical"]["totalEvents"] == sum(payload["historical"]["monthlyEvents"])


def test_earthquake_alert_for_recent_strong_event():
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    payload = synthetic_data.get_earthquake(*DHAKA, rng=FixedRandom(0.9, integer=1), now=now)

    assert len(payload["recent"]) == 1
    assert payload["recent"][0]["time"] == (now - timedelta(days=1)).isoformat()
    assert len(payload["alerts"]) == 1
    assert payload["alerts"][0]["type"] == "info"
    assert payload["alerts"][0]["timestamp"] == payload["recent"][0]["time"]


def test_earthquake_no_alert_for_old_events():
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    payload = synthetic_data.get_earthquake(*DHAKA, rng=FixedRandom(0.9, integer=3), now=now)
    assert payload["alerts"] == []


def test_earthquake_no_alert_for_weak_events():
    payload = synthetic_data.get_earthquake(*DHAKA, rng=FixedRandom(0.1, integer=1))
    assert payload["recent"][0]["magnitude"] <= 3.2
    assert payload["alerts"] == []
    assert payload["risk"]["level"] == "low"


def test_analytics_uses_multiplier_and_mean():
    payload = synthetic_data.get_analytics("Atlantis", 0.9, rng=FixedRandom(0.0))
    scores = payload["categoryScores"]

    assert scores == {
        "airQuality": round(70 * 0.9),
        "waterQuality": round(75 * 0.9),
        "soilHealth": round(85 * 0.9),
        "climate": round(72 * 0.9),
        "biodiversity": round(77 * 0.9),
        "noise": round(65 * 0.9),
    }
    assert payload["overallScore"] == round(sum(scores.values()) / 6)


def test_analytics_trends_partition_categories():
    for seed in range(25):
        payload = synthetic_data.get_analytics("Dhaka", 0.85, rng=random.Random(seed))
        trends = payload["trends"]
        listed = trends["improving"] + trends["declining"] + trends["stable"]
        assert sorted(listed) == sorted(payload["categoryScores"])
        for name in trends["improving"]:
            assert payload["categoryScores"][name] > 80
        for name in trends["declining"]:
            assert payload["categoryScores"][name] < 65


def test_analytics_location_risk_factors():
    factors = {f["factor"]: f for f in synthetic_data.get_analytics("Barisal", 0.92)["riskFactors"]}
    assert factors["Flood Risk"]["level"] == "high"
    assert factors["Urban Heat Island"]["level"] == "low"

    factors = {f["factor"]: f for f in synthetic_data.get_analytics("Dhaka", 0.85)["riskFactors"]}
    assert factors["Urban Heat Island"] == {"factor": "Urban Heat Island", "level": "high", "impact": 75}
    assert factors["Flood Risk"]["level"] == "moderate"


def test_acknowledge_data_points_counts_without_storing():
    ack = synthetic_data.acknowledge_data_points("Dhaka", [{"a": 1}, {"b": 2}])
    assert ack["success"] is True
    assert ack["received"] == 2

import random
from datetime import datetime, timedelta, timezone

from severity import (
    earthquake_risk,
    factor_level,
    flood_risk,
    heatwave_risk,
    iso_timestamp,
    make_alert,
    score_trend,
    soil_fertility,
)

HISTORY_YEARS = ["2020", "2021", "2022", "2023", "2024", "2025"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

FLOOD_EVENTS_PER_YEAR = [3, 2, 5, 7, 4, 6]
ANNUAL_RAINFALL_MM = [1200, 1450, 1800, 2100, 1650, 1950]

# (label, probability offset, rainfall offset, clamp)
FLOOD_FORECAST_STEPS = [
    ("Tomorrow", 7, 16.7, lambda p: min(p, 85)),
    ("Day 3", -7, -14.4, lambda p: max(p, 5)),
    ("Day 4", -20, -26.9, lambda p: max(p, 3)),
    ("Day 5", -13, -20.2, lambda p: max(p, 7)),
]

EARTHQUAKE_PLACES = [
    "Near Chittagong",
    "Bay of Bengal",
    "Near Sylhet",
    "Assam Border",
    "Myanmar Border",
    "Near Rangpur",
]
EARTHQUAKE_ALERT_MAGNITUDE = 3.2
EARTHQUAKE_ALERT_WINDOW = timedelta(hours=48)

FLOOD_ALERT_PROBABILITY = 40
SOIL_OPTIMAL_SCORE = 75

# (category, lower bound, width) of the raw analytics draw before weighting
ANALYTICS_CATEGORIES = [
    ("airQuality", 70, 20),
    ("waterQuality", 75, 15),
    ("soilHealth", 85, 10),
    ("climate", 72, 18),
    ("biodiversity", 77, 13),
    ("noise", 65, 25),
]
FLOOD_PRONE_DIVISIONS = ("Barisal", "Sylhet", "Rangpur")


def _assemble(location, lat, lon, **sections):
    """Merge the generated sections into the common response envelope."""
    payload = {"location": location, "coordinates": {"lat": lat, "lon": lon}}
    payload.update(sections)
    payload["lastUpdated"] = iso_timestamp()
    return payload


# Function to get heatwave conditions
def get_heatwave(location, lat, lon, rng=None):
    rng = rng or random

    # Warming trend of roughly 1.2°C a year
    historical = {
        "years": HISTORY_YEARS,
        "maxTemperatures": [round(32 + i * 1.2 + rng.uniform(0, 2), 1) for i in range(len(HISTORY_YEARS))],
        "heatwaveDays": [12 + i * 6 + rng.randint(0, 7) for i in range(len(HISTORY_YEARS))],
        "trend": "increasing",
    }

    temperature = round(rng.uniform(35, 45), 1)
    heat_index = round(temperature + rng.uniform(5, 10), 1)
    risk_level = heatwave_risk(heat_index)

    current = {
        "temperature": temperature,
        "heatIndex": heat_index,
        "riskLevel": risk_level,
        "daysInHeatwave": rng.randint(1, 14),
        "forecast": [round(temperature + rng.uniform(-3, 3), 1) for _ in range(5)],
    }
    alerts = [make_alert("heatwave")] if risk_level == "high" else []

    return _assemble(location, lat, lon, historical=historical, current=current, alerts=alerts)


def flood_forecast(probability, rainfall):
    """Five-day outlook derived from today's probability and rainfall."""
    forecast = [{"day": "Today", "probability": probability, "rainfall": rainfall}]
    for day, prob_offset, rain_offset, clamp in FLOOD_FORECAST_STEPS:
        forecast.append({
            "day": day,
            "probability": clamp(probability + prob_offset),
            "rainfall": round(rainfall + rain_offset, 1),
        })
    return forecast


# Function to get flood conditions
def get_flood(location, lat, lon, rng=None):
    rng = rng or random

    historical = {
        "years": HISTORY_YEARS,
        "floodEvents": list(FLOOD_EVENTS_PER_YEAR),
        "annualRainfall": list(ANNUAL_RAINFALL_MM),
        "trend": "increasing",
    }

    rainfall = round(rng.uniform(45.6, 75.6), 1)
    water_level = round(rng.uniform(3.5, 5.5), 1)
    probability = rng.randint(10, 69)

    current = {
        "riskLevel": flood_risk(probability),
        "waterLevel": water_level,
        "rainfall24h": rainfall,
        "floodProbability": probability,
        "activeFloods": rng.randint(0, 3),
        "forecast": flood_forecast(probability, rainfall),
    }
    alerts = [make_alert("flood")] if probability > FLOOD_ALERT_PROBABILITY else []

    return _assemble(location, lat, lon, historical=historical, current=current, alerts=alerts)


def soil_health_score(ph, organic, nitrogen, phosphorus, potassium):
    if 6.0 <= ph <= 7.5:
        ph_score = 100
    else:
        ph_score = max(0, 100 - abs(6.75 - ph) * 40)
    organic_score = min(100, organic / 4 * 100)
    nutrient_score = min(100, nitrogen + phosphorus + potassium / 4)
    return round((ph_score + organic_score + nutrient_score) / 3)


# Function to get soil conditions
def get_soil(location, lat, lon, rng=None):
    rng = rng or random

    historical = {
        "years": HISTORY_YEARS,
        "phLevels": [round(rng.uniform(6.6, 7.0), 1) for _ in HISTORY_YEARS],
        "organicMatter": [round(rng.uniform(2.9, 3.5), 1) for _ in HISTORY_YEARS],
        "nitrogen": [rng.randint(40, 54) for _ in HISTORY_YEARS],
        "phosphorus": [rng.randint(20, 34) for _ in HISTORY_YEARS],
        "potassium": [rng.randint(170, 194) for _ in HISTORY_YEARS],
    }

    ph = rng.uniform(6.6, 7.0)
    organic = rng.uniform(2.9, 3.5)
    nitrogen = rng.randint(40, 54)
    phosphorus = rng.randint(20, 34)
    potassium = rng.randint(170, 194)
    health_score = soil_health_score(ph, organic, nitrogen, phosphorus, potassium)

    current = {
        "ph": round(ph, 1),
        "organicMatter": round(organic, 1),
        "nitrogen": nitrogen,
        "phosphorus": phosphorus,
        "potassium": potassium,
        "moisture": round(rng.uniform(20, 35), 1),
        "temperature": round(rng.uniform(16, 24), 1),
        "fertility": soil_fertility(health_score),
        "healthScore": health_score,
    }
    # Each fraction is drawn on its own; the three do not add up to 100.
    composition = {
        "sand": rng.randint(35, 49),
        "clay": rng.randint(25, 39),
        "silt": rng.randint(30, 44),
    }
    template = "soil_optimal" if health_score > SOIL_OPTIMAL_SCORE else "soil_improve"

    return _assemble(
        location, lat, lon,
        historical=historical,
        current=current,
        composition=composition,
        alerts=[make_alert(template)],
    )


def _recent_earthquakes(rng, now):
    events = []
    for i in range(rng.randint(1, 4)):
        days_ago = rng.randint(1, 30)
        events.append({
            "id": i + 1,
            "magnitude": round(rng.uniform(2.5, 4.0), 1),
            "location": rng.choice(EARTHQUAKE_PLACES),
            "depth": round(rng.uniform(10, 40), 1),
            "time": now - timedelta(days=days_ago),
            "distance": round(rng.uniform(30, 130), 1),
        })
    events.sort(key=lambda event: event["time"], reverse=True)
    return events


# Function to get earthquake activity
def get_earthquake(location, lat, lon, rng=None, now=None):
    rng = rng or random
    now = now or datetime.now(timezone.utc)

    monthly_events = [rng.randint(0, 3) for _ in MONTHS]
    magnitudes = [round(rng.uniform(2.5, 4.0), 1) if count else 0 for count in monthly_events]
    historical = {
        "months": MONTHS,
        "monthlyEvents": monthly_events,
        "averageMagnitude": magnitudes,
        "totalEvents": sum(monthly_events),
        "maxMagnitude": max([m for m in magnitudes if m > 0], default=0),
        "trend": "stable",
    }

    recent = _recent_earthquakes(rng, now)
    max_recent = max(event["magnitude"] for event in recent)
    if max_recent > 3.5:
        probability = 25 + rng.uniform(0, 15)
    else:
        probability = 5 + rng.uniform(0, 20)

    risk = {
        "level": earthquake_risk(max_recent),
        "probability": round(probability),
        "nextExpected": "Within 30 days",
        "preparedness": rng.randint(70, 94),
    }

    alerts = []
    newest = recent[0]
    if newest["magnitude"] > EARTHQUAKE_ALERT_MAGNITUDE and now - newest["time"] < EARTHQUAKE_ALERT_WINDOW:
        alerts.append(make_alert("earthquake", timestamp=iso_timestamp(newest["time"]), distance=newest["distance"]))

    for event in recent:
        event["time"] = iso_timestamp(event["time"])

    return _assemble(location, lat, lon, historical=historical, recent=recent, risk=risk, alerts=alerts)


def _risk_factors(location, scores):
    if location == "Dhaka":
        heat_level, heat_impact = "high", 75
    elif "Chittagong" in location:
        heat_level, heat_impact = "moderate", 50
    else:
        heat_level, heat_impact = "low", 25
    flood_prone = location in FLOOD_PRONE_DIVISIONS

    return [
        {
            "factor": "Air Pollution",
            "level": factor_level(scores["airQuality"]),
            "impact": 100 - scores["airQuality"],
        },
        {"factor": "Urban Heat Island", "level": heat_level, "impact": heat_impact},
        {
            "factor": "Noise Pollution",
            "level": factor_level(scores["noise"]),
            "impact": 100 - scores["noise"],
        },
        {
            "factor": "Flood Risk",
            "level": "high" if flood_prone else "moderate",
            "impact": 65 if flood_prone else 35,
        },
    ]


# Function to get the aggregate environmental analytics
def get_analytics(location, multiplier, rng=None):
    """
    Six weighted category scores with their overall mean, per-category trends,
    location risk factors and a six-month comparison against the average.
    """
    rng = rng or random

    scores = {
        name: round((low + rng.uniform(0, width)) * multiplier)
        for name, low, width in ANALYTICS_CATEGORIES
    }
    overall = round(sum(scores.values()) / len(scores))

    trends = {"improving": [], "declining": [], "stable": []}
    for name, score in scores.items():
        trends[score_trend(score)].append(name)

    return {
        "location": location,
        "overallScore": overall,
        "categoryScores": scores,
        "trends": trends,
        "riskFactors": _risk_factors(location, scores),
        "monthlyComparison": {
            "labels": MONTHS[:6],
            "current": [overall + offset for offset in (-4, -2, -5, 0, 2, 0)],
            "average": [overall + offset for offset in (-6, -5, -8, -3, -1, -2)],
        },
        "lastUpdated": iso_timestamp(),
    }


def acknowledge_data_points(location, data_points):
    # Nothing is stored; the submission is only counted.
    return {
        "success": True,
        "message": "Data points received and processed",
        "location": location,
        "received": len(data_points or []),
        "timestamp": iso_timestamp(),
    }

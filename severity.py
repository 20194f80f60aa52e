"""
Severity and risk breakpoints shared by every environmental domain, plus the
alert templates the domain generators emit when a threshold is crossed.

Bands are listed from the most to the least severe label; a value takes the
first label whose lower bound it reaches.
"""
from datetime import datetime, timezone

# --- BREAKPOINT TABLES ---

HEATWAVE_RISK_BANDS = [(40.0, "high"), (35.0, "moderate")]
FLOOD_RISK_BANDS = [(50.0, "high"), (25.0, "moderate")]

HEAT_SEVERITY_BANDS = [(45.0, "critical"), (40.0, "high"), (35.0, "medium")]
FLOOD_SEVERITY_BANDS = [(8.0, "critical"), (6.0, "high"), (4.0, "medium")]
EARTHQUAKE_SEVERITY_BANDS = [(7.0, "critical"), (5.5, "high"), (3.5, "medium")]

SOIL_POOR_PH = (4.5, 8.5)
SOIL_SUBOPTIMAL_PH = (5.5, 7.8)

SEVERITY_LEVELS = ("critical", "high", "medium", "low")

HEAT_DESCRIPTIONS = {
    "critical": "Extreme heat emergency - {value}°C",
    "high": "Dangerous heat levels - {value}°C",
    "medium": "High temperature warning - {value}°C",
    "low": "Normal temperature - {value}°C",
}
FLOOD_DESCRIPTIONS = {
    "critical": "Severe flooding - {value}m water level",
    "high": "High flood risk - {value}m water level",
    "medium": "Moderate flood risk - {value}m level",
    "low": "Normal water level - {value}m",
}
SOIL_DESCRIPTIONS = {
    "high": "Poor soil quality - pH {value}",
    "medium": "Suboptimal soil - pH {value}",
    "low": "Good soil conditions - pH {value}",
}
EARTHQUAKE_DESCRIPTIONS = {
    "critical": "Major earthquake - {value} magnitude",
    "high": "Moderate earthquake - {value} magnitude",
    "medium": "Minor earthquake - {value} magnitude",
    "low": "Micro earthquake - {value} magnitude",
}

# --- ALERT TEMPLATES ---

ALERT_TEMPLATES = {
    "heatwave": ("warning", "Extreme heat warning in effect for the next 3 days"),
    "flood": ("warning", "Heavy rainfall expected in the next 48 hours"),
    "earthquake": ("info", "Minor seismic activity detected {distance}km from your location"),
    "soil_optimal": ("info", "Soil fertility levels are optimal for current season"),
    "soil_improve": ("info", "Consider soil improvement measures for better crop yields"),
}


def iso_timestamp(moment=None):
    """ISO-8601 UTC timestamp, `now` when no moment is given."""
    moment = moment or datetime.now(timezone.utc)
    return moment.isoformat()


def classify(value, bands, default="low"):
    for bound, label in bands:
        if value >= bound:
            return label
    return default


# --- PER-LOCATION RISK ---

def heatwave_risk(heat_index):
    return classify(heat_index, HEATWAVE_RISK_BANDS)


def flood_risk(probability):
    return classify(probability, FLOOD_RISK_BANDS)


def earthquake_risk(max_magnitude):
    # Strict bounds: exactly 4.0 is still moderate.
    if max_magnitude > 4.0:
        return "high"
    if max_magnitude > 3.0:
        return "moderate"
    return "low"


def soil_fertility(health_score):
    if health_score > 80:
        return "high"
    if health_score > 60:
        return "moderate"
    return "low"


def score_trend(score):
    if score > 80:
        return "improving"
    if score < 65:
        return "declining"
    return "stable"


def factor_level(score):
    """Risk level of an analytics factor, where a low score means high risk."""
    if score < 60:
        return "high"
    if score < 75:
        return "moderate"
    return "low"


# --- MAP OVERLAY SEVERITY ---

def heat_severity(temperature):
    severity = classify(temperature, HEAT_SEVERITY_BANDS)
    return severity, HEAT_DESCRIPTIONS[severity].format(value=temperature)


def flood_severity(water_level):
    severity = classify(water_level, FLOOD_SEVERITY_BANDS)
    return severity, FLOOD_DESCRIPTIONS[severity].format(value=water_level)


def soil_severity(ph):
    """
    Severity of a soil pH reading. Both band edges are inclusive: pH 4.5 and
    8.5 are already poor, pH 5.5 and 7.8 are already suboptimal.
    """
    poor_low, poor_high = SOIL_POOR_PH
    sub_low, sub_high = SOIL_SUBOPTIMAL_PH
    if ph <= poor_low or ph >= poor_high:
        severity = "high"
    elif ph <= sub_low or ph >= sub_high:
        severity = "medium"
    else:
        severity = "low"
    return severity, SOIL_DESCRIPTIONS[severity].format(value=ph)


def earthquake_severity(magnitude):
    severity = classify(magnitude, EARTHQUAKE_SEVERITY_BANDS)
    return severity, EARTHQUAKE_DESCRIPTIONS[severity].format(value=magnitude)


# --- ALERTS ---

def make_alert(template, alert_id=1, timestamp=None, **fields):
    """Build an alert record from one of ALERT_TEMPLATES."""
    alert_type, message = ALERT_TEMPLATES[template]
    return {
        "id": alert_id,
        "type": alert_type,
        "message": message.format(**fields),
        "timestamp": timestamp or iso_timestamp(),
    }

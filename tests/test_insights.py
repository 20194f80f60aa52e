import insights


def _titles(location):
    return [item["title"] for item in insights.generate_insights(location)["recommendations"]]


def test_challenge_keywords_match_inside_phrases():
    # "flash floods" and "seasonal flooding" both count as flood challenges
    for location in ("Sylhet", "Rangpur", "Barisal"):
        result = insights.generate_insights(location)
        assert result["recommendations"][1]["title"] == "Smart Flood Management System"
        assert result["predictions"][2]["category"] == "Flood Risk"
        assert result["correlations"][2]["factor2"] == "Flood Risk"

    # "agricultural chemicals" and "agricultural runoff" both count as agricultural
    for location in ("Mymensingh", "Barisal"):
        assert _titles(location)[2] == "Smart Agriculture Initiative"


def test_profiles_without_keyword_fall_through():
    result = insights.generate_insights("Rajshahi")
    assert result["recommendations"][1]["title"] == "Sustainable Development Planning"
    assert result["predictions"][0]["prediction"].startswith("Rising temperatures")
    assert result["predictions"][2]["category"] == "Climate Resilience"

    # "industrial pollution" is not air pollution
    chattogram = insights.generate_insights("Chattogram (Chittagong)")
    assert chattogram["recommendations"][0]["priority"] == "medium"
    assert chattogram["correlations"][0]["factor2"] == "Water Quality"


def test_unknown_location_uses_dhaka_profile():
    result = insights.generate_insights("Atlantis")
    assert result["location"] == "Atlantis"
    assert result["recommendations"][0]["priority"] == "high"
    assert result["recommendations"][1]["title"] == "Urban Heat Island Mitigation"

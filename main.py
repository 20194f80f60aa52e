import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
import insights
import map_overlay
import notifications
import synthetic_data
from locations import InvalidLocationError, location_multiplier, resolve_location
from severity import iso_timestamp

logger = logging.getLogger(__name__)

# --- INITIALIZATION ---

# Initialize the FastAPI app
app = FastAPI(title="WellSphere Environmental API")

# Add CORS middleware so the dashboard can call the API from any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)

if config.NASA_API_KEY == "DEMO_KEY":
    logger.info("NASA_API_KEY not set, running with the demo key.")


# --- REQUEST MODELS ---

class AnalyticsSubmission(BaseModel):
    location: Optional[str] = None
    dataPoints: List[Any] = []


class NotificationRequest(BaseModel):
    email: str
    type: str
    message: str
    location: Optional[str] = None


# --- ERROR RENDERING ---

@app.exception_handler(StarletteHTTPException)
async def render_http_error(request, exc):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def render_validation_error(request, exc):
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Missing required fields"})


# --- HELPER FUNCTIONS ---

def get_location_coords(location: Optional[str]):
    """Resolve a division name, answering 400 when it is missing or unsupported."""
    try:
        return resolve_location(location)
    except InvalidLocationError:
        raise HTTPException(status_code=400, detail="Invalid location")


def require_location(location: Optional[str]):
    if not location:
        raise HTTPException(status_code=400, detail="Location is required")
    return location


# --- API ENDPOINTS ---

@app.get("/")
def read_root():
    return {"message": "Welcome to the WellSphere Environmental API. See /docs for endpoint details."}


@app.get("/api/health")
def health():
    return {"status": "ok", "timestamp": iso_timestamp()}


@app.get("/api/heatwave")
def get_heatwave(location: Optional[str] = None):
    """Current heat conditions, 5-day forecast and yearly history for a division."""
    lat, lon = get_location_coords(location)
    try:
        return synthetic_data.get_heatwave(location, lat, lon)
    except Exception:
        logger.exception("Error generating heatwave data for %s", location)
        raise HTTPException(status_code=500, detail="Failed to fetch data")


@app.get("/api/flood")
def get_flood(location: Optional[str] = None):
    """Flood probability, water level and the derived 5-day outlook."""
    lat, lon = get_location_coords(location)
    try:
        return synthetic_data.get_flood(location, lat, lon)
    except Exception:
        logger.exception("Error generating flood data for %s", location)
        raise HTTPException(status_code=500, detail="Failed to fetch data")


@app.get("/api/soil")
def get_soil(location: Optional[str] = None):
    """Soil chemistry, fertility score and composition."""
    lat, lon = get_location_coords(location)
    try:
        return synthetic_data.get_soil(location, lat, lon)
    except Exception:
        logger.exception("Error generating soil data for %s", location)
        raise HTTPException(status_code=500, detail="Failed to fetch data")


@app.get("/api/earthquake")
def get_earthquake(location: Optional[str] = None):
    """Recent seismic events near a division with a monthly history and risk block."""
    lat, lon = get_location_coords(location)
    try:
        return synthetic_data.get_earthquake(location, lat, lon)
    except Exception:
        logger.exception("Error generating earthquake data for %s", location)
        raise HTTPException(status_code=500, detail="Failed to fetch data")


@app.get("/api/analytics")
def get_analytics(location: Optional[str] = None):
    """
    Aggregate environmental scores. Any location string is accepted; names
    outside the 8 divisions are weighted with the default multiplier.
    """
    require_location(location)
    try:
        return synthetic_data.get_analytics(location, location_multiplier(location))
    except Exception:
        logger.exception("Error generating analytics for %s", location)
        raise HTTPException(status_code=500, detail="Failed to generate analytics")


@app.post("/api/analytics")
def submit_analytics(submission: AnalyticsSubmission):
    try:
        return synthetic_data.acknowledge_data_points(submission.location, submission.dataPoints)
    except Exception:
        logger.exception("Error processing analytics data")
        raise HTTPException(status_code=500, detail="Failed to process data")


@app.get("/api/environmental-map")
def get_environmental_map(location: str = "all", realtime: str = "false"):
    """
    Synthetic heatwave, flood and soil points for one division (or all),
    plus live USGS earthquakes when realtime=true.
    """
    try:
        return map_overlay.build_map_payload(location, realtime=realtime.lower() == "true")
    except InvalidLocationError:
        raise HTTPException(status_code=400, detail="Invalid location")
    except Exception:
        logger.exception("Error in environmental map API")
        raise HTTPException(status_code=500, detail="Failed to fetch environmental data")


@app.get("/api/ai-insights")
def get_ai_insights(location: Optional[str] = None):
    require_location(location)
    try:
        return insights.generate_insights(location)
    except Exception:
        logger.exception("Error generating insights for %s", location)
        raise HTTPException(status_code=500, detail="Failed to generate insights")


@app.post("/api/notifications")
def post_notification(request: NotificationRequest):
    if not (request.email and request.type and request.message):
        raise HTTPException(status_code=400, detail="Missing required fields")
    try:
        return notifications.send_notification(request.email, request.type, request.message, request.location)
    except Exception:
        logger.exception("Error sending notification")
        raise HTTPException(status_code=500, detail="Failed to send notification")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)

import logging

import config
from severity import iso_timestamp

logger = logging.getLogger(__name__)

SUBJECTS = {
    "heatwave": "🌡️ Heatwave Alert - {location}",
    "flood": "💧 Flood Alert - {location}",
    "earthquake": "🌍 Earthquake Alert - {location}",
    "soil": "🌱 Soil Quality Alert - {location}",
}
DEFAULT_TYPE = "heatwave"


def notification_subject(alert_type, location):
    template = SUBJECTS.get(alert_type, SUBJECTS[DEFAULT_TYPE])
    return template.format(location=location)


def send_notification(email, alert_type, message, location=None):
    """
    Record a notification request. Delivery is disabled, the notification
    is only written to the log.
    """
    subject = notification_subject(alert_type, location or "your area")
    logger.info(
        "Email notification (simulated): from=%s to=%s subject=%r type=%s location=%s message=%r",
        config.EMAIL_USER, email, subject, alert_type, location, message,
    )
    return {
        "success": True,
        "message": "Notification sent successfully",
        "timestamp": iso_timestamp(),
    }

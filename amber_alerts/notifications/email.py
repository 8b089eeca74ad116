import os
import smtplib
from email.mime.text import MIMEText

import httpx

from amber_alerts.config import (
    EMAIL_BACKEND,
    EMAIL_USER,
    EMAIL_PASS,
    SMTP_HOST,
    SMTP_PORT,
    LOOPS_API_KEY,
    LOOPS_API_URL,
    LOOPS_TRANSACTIONAL_ID,
    LOOPS_API_TIMEOUT,
)
from amber_alerts.exceptions import NotificationError
from amber_alerts.logging import log_event
from amber_alerts.models import AlertKind
from amber_alerts.notifications.email_template import prepare_email_body


def _plain_number(value):
    return f"{value:g}"


def compose_alert(alert):
    """
    Builds the template variables for one alert:
    descriptor, direction relative to the threshold, formatted value and message.
    """
    value = alert.value
    threshold = alert.threshold
    if alert.kind == AlertKind.HIGH_PRICE:
        descriptor = "High Price Alert ⚡"
        direction = "above"
        message = (
            f"The current price ({value:.2f}¢/kWh) is above your threshold of {threshold:.2f}¢/kWh. "
            "You may want to reduce your energy usage."
        )
    elif alert.kind == AlertKind.LOW_PRICE:
        descriptor = "Low Price Alert 💰"
        direction = "below"
        message = (
            f"The current price ({value:.2f}¢/kWh) is below your threshold of {threshold:.2f}¢/kWh. "
            "This might be a good time to use energy-intensive appliances."
        )
    elif alert.kind == AlertKind.RENEWABLE:
        descriptor = "High Renewables Alert 🌱"
        direction = "above"
        message = (
            f"The current renewable percentage ({value:.0f}%) is above your threshold of "
            f"{_plain_number(threshold)}%. This is a great time to use electricity!"
        )
    else:
        raise ValueError(f"Unknown alert kind: {alert.kind}")

    return {
        "alert_descriptor": descriptor,
        "current_price": f"{value:.2f}",
        "threshold_descriptor": direction,
        "alert_message": message,
    }


class LoopsSender:
    """Sends alerts through a Loops transactional email template."""

    def __init__(self, http_client, api_key=LOOPS_API_KEY, transactional_id=LOOPS_TRANSACTIONAL_ID, api_url=LOOPS_API_URL,
                 timeout=LOOPS_API_TIMEOUT):
        self.http = http_client
        self.api_key = api_key
        self.transactional_id = transactional_id
        self.api_url = api_url
        self.timeout = timeout

    def send(self, user, alert):
        payload = {
            "transactionalId": self.transactional_id,
            "email": user.notification_email,
            "dataVariables": {"first_name": user.user_first_name, **compose_alert(alert)},
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            response = self.http.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise NotificationError(f"HTTP error: {e}") from e
        if not response.is_success:
            raise NotificationError(f"Loops rejected email: {response.status_code} {response.text}")


class SmtpSender:
    """Sends alerts as HTML mail over SMTP with STARTTLS."""

    def __init__(self, host=SMTP_HOST, port=SMTP_PORT, user=EMAIL_USER, password=EMAIL_PASS):
        self.host = host
        self.port = port
        self.user = user
        self.password = password

    def send(self, user, alert):
        variables = compose_alert(alert)
        subject = f"{variables['alert_descriptor']} | Amber price alerts"
        body = prepare_email_body(
            user.user_first_name,
            variables["alert_descriptor"],
            variables["current_price"],
            variables["threshold_descriptor"],
            variables["alert_message"],
        )
        self.send_email(user.notification_email, subject, body)

    def send_email(self, to_email, subject, body):
        log_event("INFO", "Preparing to send email", to=to_email, subject=subject, github_sha=os.getenv("GITHUB_SHA"))
        msg = MIMEText(body, "html")
        msg['Subject'] = subject
        msg['From'] = self.user
        msg['To'] = to_email
        try:
            with smtplib.SMTP(self.host, self.port) as server:
                server.starttls()
                server.login(self.user, self.password)
                server.sendmail(self.user, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"SMTP error: {e}") from e


def get_sender(http_client, backend=EMAIL_BACKEND):
    """Returns the configured sender. `http_client` is only used by the Loops backend."""
    if backend == "loops":
        return LoopsSender(http_client)
    if backend == "smtp":
        return SmtpSender()
    raise ValueError(f"Unknown EMAIL_BACKEND: {backend}")


def notify_alert(sender, user, alert):
    """
    Dispatches one alert email. Failures are logged and reported through the
    return value so the caller can continue with the next alert.
    """
    try:
        sender.send(user, alert)
    except Exception as e:
        log_event(
            "ERROR",
            f"Failed to send notification to {user.notification_email}",
            alert=alert.kind.value,
            error=str(e),
        )
        return False
    log_event(
        "INFO",
        "Notification sent",
        to=user.notification_email,
        alert=alert.kind.value,
        value=alert.value,
        threshold=alert.threshold,
    )
    return True

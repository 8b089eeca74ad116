from datetime import datetime

import pytz

from amber_alerts.config import LOCAL_TIMEZONE
from amber_alerts.exceptions import PricingAPIError
from amber_alerts.logging import log_event
from amber_alerts.models import Alert, AlertKind, SweepResult
from amber_alerts.notifications.email import notify_alert

QUIET = "quiet"
MISCONFIGURED = "misconfigured"
FAILED = "failed"
EVALUATED = "evaluated"


def minutes_since_midnight(value):
    """
    Converts an `HH:MM` (or `HH:MM:SS`) string, a time or a datetime to minutes since midnight.
    Seconds are ignored.
    """
    if isinstance(value, str):
        hours, minutes = value.split(":")[:2]
        return int(hours) * 60 + int(minutes)
    return value.hour * 60 + value.minute


def is_in_quiet_hours(start, end, now):
    """
    Returns True when `now` falls inside the quiet window [start, end).
    A window whose start is after its end wraps past midnight.
    """
    start_min = minutes_since_midnight(start)
    end_min = minutes_since_midnight(end)
    now_min = minutes_since_midnight(now)
    if start_min > end_min:
        return now_min >= start_min or now_min < end_min
    return start_min <= now_min < end_min


def evaluate_thresholds(user, sample):
    """
    Compares a price sample against the user's thresholds.
    Each alert kind is checked independently; inverted high/low thresholds are allowed.
    """
    alerts = []
    if sample.price > user.high_price_threshold:
        alerts.append(Alert(AlertKind.HIGH_PRICE, sample.price, user.high_price_threshold))
    if sample.price < user.low_price_threshold:
        alerts.append(Alert(AlertKind.LOW_PRICE, sample.price, user.low_price_threshold))
    if sample.renewables > user.renewable_threshold:
        alerts.append(Alert(AlertKind.RENEWABLE, sample.renewables, user.renewable_threshold))
    return alerts


def local_now(tz_name=LOCAL_TIMEZONE):
    return datetime.now(pytz.timezone(tz_name))


def process_user(user, amber, sender, now):
    """
    Processes a single subscriber: quiet hours, credentials, price fetch, thresholds and alerts.
    Returns the outcome and the number of alerts sent and failed.
    """
    email = user.notification_email

    if user.quiet_hours_enabled and is_in_quiet_hours(user.quiet_hours_start, user.quiet_hours_end, now):
        log_event("INFO", f"Skipping notifications for {email} - quiet hours")
        return QUIET, 0, 0

    if not user.amber_api_token or not user.amber_site_id:
        log_event("WARN", f"Missing API token or site ID for {email}")
        return MISCONFIGURED, 0, 0

    try:
        sample = amber.get_current_price(user.amber_api_token, user.amber_site_id)
    except PricingAPIError as e:
        log_event("ERROR", f"Error processing user {email}", error=str(e))
        return FAILED, 0, 0

    alerts = evaluate_thresholds(user, sample)
    log_event(
        "INFO",
        "Evaluated thresholds",
        email=email,
        price=sample.price,
        renewables=sample.renewables,
        spike_status=sample.spike_status,
        alerts=[alert.kind.value for alert in alerts],
    )

    sent = failed = 0
    for alert in alerts:
        if notify_alert(sender, user, alert):
            sent += 1
        else:
            failed += 1
    return EVALUATED, sent, failed


def run_sweep(store, amber, sender, now=None):
    """
    Runs one evaluation sweep across all eligible users.
    A failure to load users propagates; anything after that is isolated per user.
    """
    users = store.fetch_eligible_users()
    if now is None:
        now = local_now()

    result = SweepResult(users=len(users))
    if not users:
        log_event("INFO", "No active users found")
        return result

    for user in users:
        try:
            outcome, sent, failed = process_user(user, amber, sender, now)
        except Exception as e:
            log_event("ERROR", f"Error processing user {user.notification_email}", error=str(e))
            outcome, sent, failed = FAILED, 0, 0

        if outcome == QUIET:
            result.quiet += 1
        elif outcome == MISCONFIGURED:
            result.misconfigured += 1
        elif outcome == FAILED:
            result.failed += 1
            result.failed_users.append(user.notification_email)
        else:
            result.evaluated += 1
        result.alerts_sent += sent
        result.alerts_failed += failed

    log_event(
        "INFO",
        "Price monitor check completed",
        users=result.users,
        quiet=result.quiet,
        misconfigured=result.misconfigured,
        failed=result.failed,
        evaluated=result.evaluated,
        alerts_sent=result.alerts_sent,
        alerts_failed=result.alerts_failed,
    )
    return result

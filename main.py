"""
Scheduled job for Amber electricity price alerts.
Loads subscriber settings from Supabase, reads the current Amber price for each
site and emails high price, low price and renewables alerts.
"""
# Runs every 30 minutes from the scheduler
import os
import sys
from amber_alerts.amber import AmberClient, create_http_client
from amber_alerts.config import EMAIL_BACKEND, LOCAL_TIMEZONE
from amber_alerts.db import SettingsStore, get_supabase_client
from amber_alerts.logging import log_event
from amber_alerts.notifications.email import get_sender
from amber_alerts.notifications.processing import local_now, run_sweep

def main():
    """
    Main function orchestrates the alert job:
    - Builds the Supabase, Amber and email clients
    - Runs one sweep over all active users
    - Exits non-zero when the user list could not be loaded
    """
    now = local_now()
    log_event("INFO", "Startup marker", github_sha=os.getenv("GITHUB_SHA"), local_now=str(now), timezone=LOCAL_TIMEZONE, email_backend=EMAIL_BACKEND)
    try:
        store = SettingsStore(get_supabase_client())
        with create_http_client() as http_client:
            amber = AmberClient(http_client)
            sender = get_sender(http_client)
            run_sweep(store, amber, sender, now)
    except Exception as e:
        log_event("ERROR", "Price monitor failed", error=str(e))
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())

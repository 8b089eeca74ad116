from supabase import create_client
from amber_alerts.config import SUPABASE_URL, SUPABASE_KEY, SETTINGS_TABLE
from amber_alerts.exceptions import SettingsStoreError
from amber_alerts.models import UserSettings


def get_supabase_client(url=SUPABASE_URL, key=SUPABASE_KEY):
    if not url or not key:
        raise SettingsStoreError("SUPABASE_URL and SUPABASE_KEY must be set")
    return create_client(url, key)


class SettingsStore:
    """
    Access to the per-user `settings` table.
    The sweep only reads; the settings form upserts on notification_email.
    """

    def __init__(self, client, table=SETTINGS_TABLE):
        self.client = client
        self.table = table

    def fetch_eligible_users(self):
        """Returns settings for every active user with notifications switched on."""
        try:
            res = (
                self.client.table(self.table)
                .select("*")
                .eq("active", True)
                .eq("notifications_enabled", True)
                .execute()
            )
        except Exception as e:
            raise SettingsStoreError(f"Failed to fetch users: {e}") from e
        return [UserSettings.from_row(row) for row in res.data or []]

    def get_settings(self, email):
        try:
            res = self.client.table(self.table).select("*").eq("notification_email", email).limit(1).execute()
        except Exception as e:
            raise SettingsStoreError(f"Failed to load settings for {email}: {e}") from e
        if not res.data:
            return None
        return UserSettings.from_row(res.data[0])

    def upsert_settings(self, settings, updated_at):
        row = settings.to_row()
        row["updated_at"] = updated_at
        try:
            res = self.client.table(self.table).upsert(row, on_conflict="notification_email").execute()
        except Exception as e:
            raise SettingsStoreError(f"Failed to save settings: {e}") from e
        return res.data

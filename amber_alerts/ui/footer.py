# amber_alerts/ui/footer.py

import streamlit as st
from amber_alerts.config import LOCAL_TIMEZONE

FOOTER_NOTE = (
    "Prices are checked every 30 minutes ({tz} time). "
    "Your API token is only used to read prices for your site."
)


def display_footer():
    st.divider()
    st.caption(FOOTER_NOTE.format(tz=LOCAL_TIMEZONE))

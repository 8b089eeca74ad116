# amber_alerts/ui/header.py

import streamlit as st

def display_header():
    st.markdown(
        """
        <style>
        .header-title {
            font-size: 24px;
            font-weight: bold;
            color: #333;
            padding: 10px 0;
            border-bottom: 1px solid #ddd;
        }
        </style>
        <div class='header-title'>⚡ Amber price alerts - Settings</div>
        """,
        unsafe_allow_html=True
    )
    st.markdown("")

from html import escape


def prepare_email_body(first_name, alert_descriptor, current_value, threshold_descriptor, alert_message):
    name = escape(first_name) if first_name else "there"
    return f"""<html>
  <body>
    <p>Hi {name},</p>
    <p><strong>{escape(alert_descriptor)}</strong></p>
    <p>The current reading is <strong>{escape(current_value)}</strong>, {escape(threshold_descriptor)} your threshold.</p>
    <p>{escape(alert_message)}</p>
    <p>You can change your thresholds or pause alerts from the settings page at any time.</p>
    <p>Kind regards,<br>Amber price alerts</p>
  </body>
</html>
"""

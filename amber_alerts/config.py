import os
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.environ.get('SUPABASE_URL')
SUPABASE_KEY = os.environ.get('SUPABASE_KEY')
SETTINGS_TABLE = os.environ.get('SETTINGS_TABLE', 'settings')

AMBER_API_BASE_URL = os.environ.get('AMBER_API_BASE_URL', 'https://api.amber.com.au/v1')
AMBER_API_TIMEOUT = float(os.environ.get('AMBER_API_TIMEOUT', 30))

# 'loops' (transactional template) or 'smtp'
EMAIL_BACKEND = os.environ.get('EMAIL_BACKEND', 'loops').lower()

LOOPS_API_KEY = os.environ.get('LOOPS_API_KEY')
LOOPS_API_URL = os.environ.get('LOOPS_API_URL', 'https://app.loops.so/api/v1/transactional')
LOOPS_TRANSACTIONAL_ID = os.environ.get('LOOPS_TRANSACTIONAL_ID', 'cm3tz7b1m00pp4fxob8yjbbb9')
LOOPS_API_TIMEOUT = float(os.environ.get('LOOPS_API_TIMEOUT', 30))

EMAIL_USER = os.environ.get('EMAIL_USER')
EMAIL_PASS = os.environ.get('EMAIL_PASS')
SMTP_HOST = os.environ.get('SMTP_HOST', 'smtp.gmail.com')
SMTP_PORT = int(os.environ.get('SMTP_PORT', 587))

LOCAL_TIMEZONE = os.environ.get('LOCAL_TIMEZONE', 'Australia/Sydney')

"""
Environment configuration module
Loads all environment variables used by the app (with defaults).
"""

import os
from dotenv import load_dotenv

# Load .env file (for local development)
load_dotenv()

# OpenAI (checked when the advice client is used, not at import time)
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
GPT_MODEL = os.getenv('GPT_MODEL', 'gpt-4o')

# Classification timestamps default to "now" in this timezone
APP_TIMEZONE = os.getenv('APP_TIMEZONE', 'Asia/Ho_Chi_Minh')

# Alternate keyword tables (YAML); empty -> bundled finchat/data/keywords.yaml
KEYWORDS_PATH = os.getenv('KEYWORDS_PATH', '')

# Redis storage (optional); without it expenses live in process memory
REDIS_URL = os.getenv('REDIS_URL', '')
REDIS_ENABLED = bool(REDIS_URL)
REDIS_KEY_PREFIX = os.getenv('REDIS_KEY_PREFIX', 'finchat')

"""
Local configuration (optional): fill in the API key and other settings here.
Values in this file win when non-empty; otherwise environment variables are used.

Note: for local development only, do not commit real keys.
"""

# Required: Gemini API key, e.g. "AIza..."
# Falls back to the GEMINI_API_KEY / API_KEY environment variables.
GEMINI_API_KEY = ""

# Optional: model name and OpenAI-compatible endpoint
GEMINI_MODEL = ""
GEMINI_API_BASE = ""

# Display settings for costs without an explicit currency code
DEFAULT_CURRENCY = ""
CURRENCY_LOCALE = ""

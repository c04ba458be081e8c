"""
Constants for AI Blog Summary configuration.
"""

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_API_DELAY_MS = 500

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"

# Retry policy for provider calls
MAX_ATTEMPTS = 3

# Fixed sampling temperature for every summary request
SUMMARY_TEMPERATURE = 0.7

# Completion token budget for the bullet style
BULLET_MAX_TOKENS = 300

# Upper bound on paragraphs kept for the paragraph style
MAX_PARAGRAPHS = 3

VALID_ICON_SIZES = ["small", "medium", "large"]
VALID_POPUP_THEMES = ["auto", "light", "dark"]
VALID_THUNDERBOLT_THEMES = ["auto", "light", "dark"]

API_NAMESPACE = "/ai-summary/v1"

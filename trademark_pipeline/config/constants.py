"""Pure constants for the trademark pipeline. No side effects at import time."""

# === Registry API ===
DEFAULT_API_URL = "https://api.patentstyret.no/external/opendata/register/Trademark/v1"
SEARCH_PATH = "/search/json"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
RETRY_AFTER_HEADER = "Retry-After"

# === Search request ===
APPLICATION_DATE_FROM = "0001-01-01"  # Lower bound that matches every record
PAGE_SIZE = 50
FIRST_PAGE_NUMBER = 0

# === Timeouts (seconds) ===
POOL_TIMEOUT = 10.0  # Waiting for a free connection
REQUEST_TIMEOUT = 300.0  # Whole response (5 minutes)

# === Retry ===
MAX_RETRIES = 5  # Retries after the first attempt (6 attempts total)
BACKOFF_BASE_DELAY = 0.5  # seconds
BACKOFF_MAX_DELAY = 50.0  # seconds
BACKOFF_MULTIPLIER = 2.0
RATE_LIMIT_DELAY_FACTOR = 2  # Wait twice the server's Retry-After

# === Stop conditions ===
MAX_PAGE_NUMBER = 500  # Stop once a page numbered above this is processed
MAX_DUPLICATES = 100  # Stop once more duplicates than this were observed

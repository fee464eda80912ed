"""Fixed constants shared across the pipeline."""

# Upstream explorer API
FLARE_API_BASE_URL = "https://flare-systems-explorer.flare.network/backend-url/api/v0"
ENTITY_PATH = "/entity"
PAGE_LIMIT = 200
PAGE_OFFSET = 0
DEFAULT_TIMEOUT_SECONDS = 10.0

# Snapshot freshness window, measured from creation
CACHE_TTL_SECONDS = 300

# Eligibility requires exactly this many passes
REQUIRED_PASSES = 3

# Placeholder for entities without a display name
UNKNOWN_NAME = "Unknown"

# Availability is published as a percentage
AVAILABILITY_SCALE = 100.0

DEFAULT_TOP_LIMIT = 50

API_NAME = "Flare Validator API"
API_VERSION = "1.0.0"

"""Internal constants shared across the library."""

USER_AGENT = "dealerportal/0.1"
REST_PREFIX = "/rest/v1"

DEALERS_TABLE = "dealers"
CARS_TABLE = "cars"

# Durable store keys
DEALER_ID_KEY = "dealer_id"
DEALER_NAME_KEY = "dealer_name"

LOGIN_PATH = "/dealer"

# PostgREST: ask for exactly one row, 406 otherwise
SINGLE_OBJECT_ACCEPT = "application/vnd.pgrst.object+json"
# PostgREST error code for "JSON object requested, multiple (or no) rows returned"
NO_SINGLE_ROW_CODE = "PGRST116"

# ------------------------------------------------------------------
# User-facing notification messages (never carry backend text)
# ------------------------------------------------------------------

MSG_LOAD_FAILED = "Failed to load inventory"
MSG_UPDATE_FAILED = "Failed to update car status"
MSG_INVALID_DEALER_ID = "Invalid dealer ID"


def status_message(is_sold: bool) -> str:
    """Success message for a car whose status is now *is_sold*."""
    return f"Car marked as {'sold' if is_sold else 'available'}"

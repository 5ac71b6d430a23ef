"""Default configuration constants for the Seat Direction Guide."""

# Seat grid geometry: 2 seats left of the aisle, 3 seats right
SEATS_PER_ROW = 5
LEFT_SLOTS = 2
SLOT_POSITIONS = ["left-left", "left-right", "right-left", "right-mid", "right-right"]

# Auto-fill default when a record leaves the flag blank (content store form default)
DEFAULT_AUTO_BACK_FILL = True

# Direction cascade: route codes that always mean the reverse leg
REVERSE_ROUTE_CODES = ["103"]
REVERSE_CODE_TOKENS = ["reverse", "return"]

# Train-number parity heuristic: odd numbers run origin -> destination
ODD_NUMBER_DIRECTION = "forward"

DIRECTIONS = ["forward", "reverse"]
DEFAULT_DIRECTION = "forward"

# Confidence attached to a resolved direction
CONFIDENCE_AUTHORITATIVE = "authoritative"
CONFIDENCE_HEURISTIC = "heuristic"
CONFIDENCE_DEFAULT = "default"

# Cascade rule names
RULE_ROUTE_CODE = "route_code"
RULE_STATION_PAIR = "station_pair"
RULE_UPSTREAM_FLAG = "upstream_flag"
RULE_TRAIN_NUMBER_PARITY = "train_number_parity"
RULE_DEFAULT = "default"

# Facing labels and colour tags
FACING_FRONT = "front"
FACING_BACK = "back"
FACING_UNKNOWN = "unknown"
FACING_COLORS = {"front": "blue", "back": "gray", "unknown": "white"}
FACING_HEX = {"blue": "#4A90D9", "gray": "#8C8C8C", "white": "#E6E6E6"}

# Coach-level summary labels
SUMMARY_FORWARD = "forward"
SUMMARY_BACKWARD = "backward"
SUMMARY_MIXED = "mixed"
SUMMARY_UNKNOWN = "unknown"

# Default rule config stored in session state
DEFAULT_RULE_CONFIG = {
    "reverse_route_codes": REVERSE_ROUTE_CODES,
    "reverse_code_tokens": REVERSE_CODE_TOKENS,
    "odd_number_direction": ODD_NUMBER_DIRECTION,
    "include_grid": True,
}

# Logging
LOG_LEVEL = "INFO"
LOG_FILE = None

# UI
PAGE_TITLE = "Seat Direction Guide"
PAGE_ICON = "🚆"

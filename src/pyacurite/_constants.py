"""Internal constants shared across the library."""

BASE_URL = "https://marapi.myacurite.com"
TOKEN_HEADER = "X-One-Vue-Token"
MANUFACTURER = "AcuRite"

LOGIN_ENDPOINT = "/users/login"

DEFAULT_REFRESH_INTERVAL_SECONDS = 300
DEFAULT_BATTERY_LOW_THRESHOLD = 20
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_DEVICE_CODES: tuple[str, ...] = ("5in1WS", "2in1T")
DEFAULT_SENSOR_CODES: tuple[str, ...] = ("Temperature", "Humidity")

#: Backoff delay never exceeds this multiple of the nominal interval.
MAX_BACKOFF_FACTOR = 10

#: HTTP statuses that mean the session token was rejected.
AUTH_FAILURE_STATUSES: frozenset[int] = frozenset({401, 403})

TEMPERATURE_SENSOR = "Temperature"
HUMIDITY_SENSOR = "Humidity"
FAHRENHEIT_UNIT = "F"

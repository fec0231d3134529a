"""GPSD protocol constants and connection defaults."""

DEFAULT_GPSD_HOST = "localhost"
DEFAULT_GPSD_PORT = 2947

# Watch subscription sent once after connecting. Key order matters to
# anyone diffing wire captures, so it is spelled out rather than dumped.
WATCH_COMMAND = '?WATCH={"enable":true,"json":true,"nmea":true,"raw":1,"scaled":true}'

# Record classes (the "class" member of every GPSD JSON object)
CLASS_TPV = "TPV"
CLASS_VERSION = "VERSION"
CLASS_WATCH = "WATCH"
CLASS_SKY = "SKY"
CLASS_DEVICES = "DEVICES"
CLASS_DEVICE = "DEVICE"
CLASS_ERROR = "ERROR"

# TPV members consumed by the fix extractor
FIELD_LAT = "lat"
FIELD_LON = "lon"
FIELD_ALT = "alt"
FIELD_TIME = "time"

DEFAULT_ALTITUDE_M = 0.0
UNKNOWN_TIME = ""

# StreamReader buffer limit; GPSD lines are a few hundred bytes, SKY
# reports with many satellites reach a few KB.
STREAM_LIMIT_BYTES = 1024 * 1024
DEFAULT_CONNECT_TIMEOUT = 10.0
CLOSE_TIMEOUT = 1.0

# Longest slice of a bad line quoted in warnings
MAX_LINE_PREVIEW = 80

MODE_SINGLE_FIX = "single-fix"
MODE_CONTINUOUS = "continuous"

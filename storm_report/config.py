"""
Storm Impact Report — Configuration: paths, source URL, column map, category rules.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths (override with STORM_DATA_DIR env var)
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("STORM_DATA_DIR", str(Path.home() / "storm_data")))
BASE_FOLDER = _data_dir
RAW_FOLDER = _data_dir / "raw"
REPORTS_FOLDER = _data_dir / "reports"

# ---------------------------------------------------------------------------
# Source dataset (NOAA Storm Database, bzip2-compressed CSV)
# ---------------------------------------------------------------------------
DATA_URL = os.environ.get(
    "STORM_DATA_URL",
    "https://d396qusza40orc.cloudfront.net/repdata%2Fdata%2FStormData.csv.bz2",
)
DATA_FILENAME = "StormData.csv.bz2"
DOWNLOAD_TIMEOUT = 300  # seconds
DOWNLOAD_CHUNK_SIZE = 1024 * 1024

# ---------------------------------------------------------------------------
# Column mapping from raw NOAA CSV → internal names
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "BGN_DATE": "begin_date",
    "EVTYPE": "event_type",
    "FATALITIES": "fatalities",
    "INJURIES": "injuries",
    "PROPDMG": "prop_dmg",
    "PROPDMGEXP": "prop_dmg_exp",
    "CROPDMG": "crop_dmg",
    "CROPDMGEXP": "crop_dmg_exp",
    "REFNUM": "refnum",
}

# Read as text so codes like "0" or "+" are not coerced to numbers
TEXT_COLS = ["BGN_DATE", "EVTYPE", "PROPDMGEXP", "CROPDMGEXP"]

NUMERIC_COLS = ["fatalities", "injuries", "prop_dmg", "crop_dmg"]

BEGIN_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"

# ---------------------------------------------------------------------------
# Damage exponent codes (matched case-insensitively)
# ---------------------------------------------------------------------------
EXPONENT_MULTIPLIERS = {
    "B": 10 ** 9,
    "M": 10 ** 6,
    "K": 10 ** 3,
}
# Applied to every other code, blank included
DEFAULT_EXPONENT_MULTIPLIER = 10 ** 1

# ---------------------------------------------------------------------------
# Event-type categories, first match wins
# Patterns are regular expressions tested case-insensitively against EVTYPE.
# ---------------------------------------------------------------------------
CATEGORY_RULES = [
    (r"TORNADO|TORNDAO|FUNNEL|WATERSPOUT|GUSTNADO|LANDSPOUT|WALL CLOUD", "Tornado"),
    (r"HURRICANE|TYPHOON|TROPICAL", "Hurricane/Tropical Storm"),
    (r"THUNDER|TSTM|MICROBURST|DOWNBURST", "Thunderstorm Wind"),
    (r"HAIL", "Hail"),
    (r"LIGHTNING|LIGHTING|LIGNTNING", "Lightning"),
    (r"SLIDE|AVALANC|MUD|LANDSLUMP", "Landslide/Avalanche"),
    (r"RIP CURRENT", "Rip Current"),
    (r"SURGE|TIDE|TIDAL|SURF|\bSEAS\b|SWELL|ROGUE WAVE|HIGH WAVES|TSUNAMI|MARINE|COASTAL|BEACH EROSION", "Coastal/Marine"),
    (r"SNOW(?!MELT)|BLIZZARD|ICE STORM|ICY|BLACK ICE|SLEET|FREEZING|FREEZE|FROST|WINTER|WINTRY|GLAZE", "Winter Weather"),
    (r"FLOOD|FLD|RAIN|PRECIP|STREAM|URBAN|SHOWER|WET", "Flood/Heavy Rain"),
    (r"FIRE|SMOKE", "Wildfire"),
    (r"HEAT|WARM|HOT|HIGH TEMP|RECORD HIGH|HYPERTHERMIA|DROUGHT|DRY|DRIEST", "Heat/Drought"),
    (r"COLD|CHILL|COOL|HYPOTHERMIA|LOW TEMP|RECORD LOW", "Cold"),
    (r"WIND|GUST|DUST|TURBULENCE", "High Wind"),
]

# Fallback when EVTYPE is blank or missing
UNKNOWN_LABEL = "UNKNOWN"

# ---------------------------------------------------------------------------
# Report settings
# ---------------------------------------------------------------------------
TOP_N = 15
UNMATCHED_LABELS_SHOWN = 20

# Harm metrics: public name → aggregated column
METRICS = {
    "fatalities": "fatalities",
    "injuries": "injuries",
    "damage": "total_damage_usd",
}

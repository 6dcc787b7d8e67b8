"""Shared constants and defaults for the journal and its analytics."""

# Outcomes within +/- this band of zero are break-even
BREAK_EVEN_EPSILON = 0.0001

# Annualisation factor for the daily Sharpe-like ratio
TRADING_DAYS_PER_YEAR = 252

FILTER_MODES = ["all", "today", "week", "month", "custom"]

# Sunday-first, matching the day index used by day-of-week rollups
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

UNKNOWN_LABEL = "Unknown"

# (lower, upper, label); a value v falls in the first range with lower < v <= upper
R_DISTRIBUTION_RANGES: list[tuple[float, float, str]] = [
    (float("-inf"), -3.0, "< -3R"),
    (-3.0, -2.0, "-3R to -2R"),
    (-2.0, -1.0, "-2R to -1R"),
    (-1.0, 0.0, "-1R to 0R"),
    (0.0, 1.0, "0R to 1R"),
    (1.0, 2.0, "1R to 2R"),
    (2.0, 3.0, "2R to 3R"),
    (3.0, float("inf"), "> 3R"),
]

# Trades carry no time of day, so the heat map places them at midday
HEAT_MAP_DEFAULT_HOUR = 12

# Keys of the browser app's local-storage layout
TRADES_STORAGE_KEY = "tj_multi_trades_v1"
SETTINGS_STORAGE_KEY = "tj_multi_settings_v1"

DEFAULT_SETTINGS: dict[str, list[str] | int] = {
    "accounts": [
        "5K Evaluation",
        "5K Funded",
        "10K Challenge",
        "25K Challenge",
        "50K Challenge",
        "100K Challenge",
        "Demo",
    ],
    "models": ["Continuation Model", "Retracement Model"],
    "sessions": ["London", "Asia", "London Lunch", "NY"],
    "entry_tfs": ["5 Min", "15 Min", "3 Min"],
    "setup_grades": ["A+", "A", "B", "Retard"],
    "key_levels": ["1H", "4H", "M30"],
    "mistakes": [
        "Against 1H OF",
        "1H Consolidation",
        "Trapped OF",
        "Overextended Prev Session/Day",
    ],
    "tilt_threshold": 2,
}

# === Pipeline config keys ===
PATHS = "paths"
DATA = "data"
RESULTS = "results"
DEFAULTS = "defaults"
ANALYSES = "analyses"
ANALYSIS = "analysis"
LOGGING = "logging"

SUPPORTED_DATA_FORMATS = (".csv", ".parquet")

# Config files written next to the outputs
TIME_TO_EVENT_CFG = "time_to_event.yaml"

# Output files
DIAGNOSTIC_SUFFIX = "_diagnostic"
OUTCOME_COUNTS_FILE = "outcome_counts.csv"

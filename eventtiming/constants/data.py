# === Outcome labels ===
CENSORED = "Censored"

# === Long-format timeline columns ===
EVENT_DATE_COL = "event_date"
SOURCE_COL = "source_column"
OUTCOME_COL = "outcome"
PRIORITY_COL = "priority"  # tie-break rank, lower wins on equal dates

# === Eligibility & blanking columns ===
BLANK_DATE_COL = "blank_date"
BLANKED_COL = "blanked"
MUST_START_BEFORE_COL = "must_start_before"
FOLLOWUP_OK_COL = "followup_okay"
OBSTIME_COL = "obstime"

# === Result column prefixes (suffix derived from the analysis name) ===
TIMETO_PREFIX = "timeto_"
OBSTIME_PREFIX = "obstime_"
OUTCOME_PREFIX = "outcome_"
OUTCOME_INT_PREFIX = "outcome_int_"

# === Result labels (prefix + analysis name) ===
TIMETO_LABEL = "Time to {analysis}"
OUTCOME_LABEL = "Outcome of {analysis}"
OBSTIME_LABEL = "Total observation time for {analysis} outcome"
LABELS_ATTR = "labels"

# === Output keys ===
RESULT = "Result"
DIAGNOSTIC = "Diagnostic"

class ConfigurationError(ValueError):
    """Raised when the event/censor configuration is inconsistent."""


class DataIntegrityError(ValueError):
    """Raised when the input data cannot give every subject a censor date."""


class MissingStartDateWarning(UserWarning):
    """Subjects without a start date stay in the output with missing results."""

"""
Error types shared by the configuration, gate and HTTP layers
"""


class ConfigError(Exception):
    """The data file name cannot be turned into a topic/language pair.

    Raised only while the application is being constructed; the process
    entrypoint turns it into a non-zero exit.
    """

    def __init__(self, file_name: str, message: str = ""):
        self.file_name = file_name
        super().__init__(
            message
            or f"Data file name '{file_name}' does not match '{{topic}}.{{language}}.txt'"
        )


class QueryError(Exception):
    """Base class for per-request failures surfaced as HTTP 500"""

    public_message = "Failed to process the request."


class DataUnavailableError(QueryError):
    """The reference text could not be read for this request"""

    public_message = "Data file is missing or cannot be read."


class UpstreamFailureError(QueryError):
    """The LLM call failed or returned something unusable"""

    public_message = "Failed to process the request."

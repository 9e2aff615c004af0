"""Error taxonomy for the twosplit tool.

Every failure of a tool invocation surfaces as exactly one of these. There is
no partial success and nothing is retried.
"""


class TwosplitError(Exception):
    """Base class for all twosplit errors."""

    pass


class ConfigurationError(TwosplitError):
    """Raised at startup when required configuration is missing or invalid."""

    pass


class ValidationError(TwosplitError, ValueError):
    """Raised when a tool request fails validation, before any backend call."""

    pass


class InvalidArgumentError(ValidationError):
    """Raised when a tool argument is empty, absent, or not an allowed value."""

    pass


class UnknownToolError(TwosplitError, LookupError):
    """Raised when an invocation names a tool that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class BackendError(TwosplitError):
    """Raised when a call to the language-model backend fails.

    The message is the underlying failure's message, unchanged. The original
    exception is kept on ``cause`` and chained via ``raise ... from``.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class MalformedSynthesisError(TwosplitError):
    """Raised by strict parsing when the synthesis text lacks the delimiter."""

    def __init__(self, text: str, delimiter: str):
        super().__init__(f"Synthesis response is missing the '{delimiter}' delimiter")
        self.text = text
        self.delimiter = delimiter


class ToolExecutionError(TwosplitError):
    """Raised by the tool adapter when the backend fails during an invocation.

    The message carries a fixed prefix so callers can tell backend failures
    apart from validation failures.
    """

    PREFIX = "Anthropic API error: "

    def __init__(self, error: BackendError):
        super().__init__(f"{self.PREFIX}{error}")
        self.error = error

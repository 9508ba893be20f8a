"""Custom exception hierarchy for mdchunk configuration and chunking."""


class MdChunkError(Exception):
    """Base exception for all mdchunk errors.

    All mdchunk-specific exceptions inherit from this class, enabling
    centralized exception handling in the CLI.
    """

    pass


class ConfigError(MdChunkError):
    """Exception raised for configuration file errors.

    Raised when a configuration file cannot be read or parsed. Invalid
    configuration *values* are normalized with a warning instead.

    Attributes:
        field: The configuration field or file that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name (or file path) where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class ParseError(MdChunkError):
    """Exception raised when markdown cannot be tokenized into a block tree.

    Attributes:
        preview: First 100 characters of the input, newlines collapsed
        cause: The underlying exception raised by the parser
        source_file: Name of the document being parsed, if known
    """

    def __init__(
        self, preview: str, cause: Exception, source_file: str | None = None
    ) -> None:
        """Initialize ParseError with input preview and cause.

        Args:
            preview: Short preview of the offending input
            cause: The underlying exception
            source_file: Optional document name for the error message
        """
        self.preview = preview
        self.cause = cause
        self.source_file = source_file
        location = f" in '{source_file}'" if source_file else ""
        super().__init__(
            f"Failed to parse markdown to AST{location}: {cause}\n"
            f'Input preview: "{preview}"'
        )


class DocumentLoadError(MdChunkError):
    """Exception raised when the input documents cannot be loaded.

    Attributes:
        path: Path that could not be read
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize DocumentLoadError with path and message.

        Args:
            path: Path to the directory or file that failed to load
            message: Descriptive error message, optionally with suggestions
        """
        self.path = path
        self.message = message
        super().__init__(f"Cannot load documents from {path}\n{message}")


class ExportError(MdChunkError):
    """Exception raised when chunk export files cannot be written.

    Attributes:
        path: Output path that could not be written
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"Failed to export to {path}: {message}")

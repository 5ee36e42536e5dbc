"""Exceptions raised by the processing core."""


class ProcessingError(Exception):
    """Base class for all image processing errors."""

    pass


class InvalidImageDimensions(ProcessingError):
    """Raised when an image or target size has a zero or negative dimension."""

    def __init__(self, width: int, height: int, what: str = "image") -> None:
        self.width = width
        self.height = height
        super().__init__(f"Invalid {what} dimensions: {width}x{height}")


class UnsupportedDitherMethod(ProcessingError):
    """Raised when a dither method has no registered implementation."""

    def __init__(self, method: object) -> None:
        self.method = method
        super().__init__(f"Unsupported dither method: {method!r}")


class ParameterOutOfRange(ProcessingError):
    """Raised for parameters that cannot be clamped into a valid range."""

    def __init__(self, name: str, value: object, detail: str = "") -> None:
        self.name = name
        self.value = value
        message = f"Parameter {name}={value!r} is out of range"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PipelineError(ProcessingError):
    """Aggregated error raised when a pipeline stage fails."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage} stage failed: {message}")

"""Exception hierarchy for Vectorize."""


class VectorizeError(Exception):
    """Base exception for all Vectorize errors."""

    pass


class BitmapError(VectorizeError):
    """Errors related to source bitmaps."""

    pass


class InvalidInputError(BitmapError):
    """Source bitmap is absent or has a zero dimension."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid input bitmap: {reason}")


class IncompatiblePixelFormatError(BitmapError):
    """Bitmap pixel layout is not supported by the pixel accessor."""

    def __init__(self, pixel_format: str) -> None:
        self.pixel_format = pixel_format
        super().__init__(
            f"Incompatible pixel format '{pixel_format}'. "
            "Use an image with 24 or 32 bits per pixel, or 8 bit indexed."
        )


class ImageLoadError(BitmapError):
    """Error decoding an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class TracingError(VectorizeError):
    """Errors raised around the external tracer."""

    pass


class TracerFailureError(TracingError):
    """The tracer returned no result."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Tracing failed: {reason}")


class GeometryError(VectorizeError):
    """Errors in curve construction."""

    pass


class ReconstructionError(GeometryError):
    """A traced path could not be rebuilt into valid curve geometry."""

    def __init__(self, path_index: int, reason: str) -> None:
        self.path_index = path_index
        self.reason = reason
        super().__init__(f"Path {path_index} skipped: {reason}")


class CurveSimplificationError(GeometryError):
    """Simplifying a curve left nothing usable."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ParameterError(VectorizeError):
    """Errors related to tracing parameters."""

    pass


class InvalidParameterError(ParameterError):
    """A parameter value is outside its documented range."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for '{name}': {reason}")


class SettingsError(VectorizeError):
    """Errors related to the persistent settings store."""

    pass


class SettingsStoreError(SettingsError):
    """Error reading or writing the backing file of a settings store."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Settings store '{path}' unusable: {reason}")


class SettingTypeError(SettingsError):
    """A stored value exists but has the wrong type."""

    def __init__(self, key: str, expected: str, actual: object) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Setting '{key}' should be {expected}, found {type(actual).__name__}"
        )

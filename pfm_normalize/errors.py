"""Exception hierarchy for pfm-normalize."""


class NormalizeError(Exception):
    """Base exception for all pfm-normalize errors."""


class ConfigurationError(NormalizeError):
    """Invalid normalization settings (epsilon, overrides, arguments)."""


class ImageError(NormalizeError):
    """Errors related to image loading or saving."""


class ImageLoadError(ImageError):
    """An image could not be read or parsed."""


class ImageSaveError(ImageError):
    """An image could not be written."""


class EmptySampleError(NormalizeError):
    """No valid (non-sentinel) samples were found in the reference images."""


class RangeError(NormalizeError):
    """The operative range has a minimum above its maximum."""


class ReportError(NormalizeError):
    """The diagnostics report could not be written."""

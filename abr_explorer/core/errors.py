"""Exception types raised by abr_explorer."""


class AbrExplorerError(Exception):
    """Base class for all abr_explorer errors."""


class ConfigurationError(AbrExplorerError):
    """Raised when a configuration value cannot be parsed."""


class QualityAnalysisError(AbrExplorerError):
    """Raised when a quality scorer fails to produce its artifact."""

    def __init__(self, message: str, quality_file=None, stderr: str = ""):
        super().__init__(message)
        self.quality_file = quality_file
        self.stderr = stderr

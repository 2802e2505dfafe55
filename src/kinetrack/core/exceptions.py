"""Custom exceptions for kinetrack."""


class KinetrackError(Exception):
    """Base exception for all kinetrack errors."""

    pass


class CalibrationError(KinetrackError):
    """Calibration could not be established from the supplied pose."""

    def __init__(self, message: str = "Calibration failed") -> None:
        self.message = message
        super().__init__(self.message)


class KeypointFormatError(KinetrackError):
    """Upstream keypoint payload does not match the COCO-17 layout."""

    def __init__(self, message: str = "Invalid keypoint payload") -> None:
        self.message = message
        super().__init__(self.message)

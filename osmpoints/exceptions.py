class OsmPointsError(Exception):
    """Base class for all errors raised by osmpoints."""


class InvalidInputError(OsmPointsError):
    """Raised when an input value (file, config entry, stream) is not valid."""


class MissingInputError(OsmPointsError):
    """Raised when a required input is not provided or does not exist."""


class ParseError(OsmPointsError):
    """Raised when the input XML document is malformed.

    This error is fatal: the run is aborted and any output already written must be discarded.
    """

    def __init__(self, message: str, position: tuple[int, int] | None = None):
        if position:
            message = f"{message} (line {position[0]}, column {position[1]})"
        super().__init__(message)
        self.position = position

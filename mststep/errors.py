"""Exception types raised by the MST step engine."""


class MSTError(Exception):
    """Base class for every error raised by :mod:`mststep`."""


class InvalidInput(MSTError, ValueError):
    """The requested run or graph construction cannot proceed."""


class NavigationBoundary(MSTError):
    """A step was requested past either end of the log.

    Only raised when navigation is called with ``strict=True``; the default
    behaviour is a no-op that returns ``False``.
    """

    def __init__(self, direction: str, cursor: int) -> None:
        self.direction = direction
        self.cursor = cursor
        where = "end" if direction == "forward" else "start"
        super().__init__(f"Cannot step {direction}: already at {where} of log (cursor={cursor})")

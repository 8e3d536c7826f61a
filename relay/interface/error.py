"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class FrameError(InterfaceError):
    """Realtime frame could not be decoded."""

    pass

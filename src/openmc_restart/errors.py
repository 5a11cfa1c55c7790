"""Exceptions raised while restarting a particle."""


class RestartError(Exception):
    """Base class for every fatal particle restart failure."""


class FormatError(RestartError):
    """Restart file is missing a dataset or a dataset has the wrong type."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Particle restart dataset '{field}': {reason}")


class UnknownRunModeError(RestartError):
    """Run mode tag is neither 'eigenvalue' nor 'fixed source'."""

    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"Unexpected run mode: {mode!r}")


class TransportError(RestartError):
    """Fatal fault raised by the transport engine during replay."""

    def __init__(self, message: str, particle_id: int | None = None, position=None):
        self.particle_id = particle_id
        self.position = position
        detail = message
        if particle_id is not None:
            detail += f" (particle {particle_id}"
            if position is not None:
                x, y, z = position
                detail += f" at ({x:.6g}, {y:.6g}, {z:.6g})"
            detail += ")"
        super().__init__(detail)

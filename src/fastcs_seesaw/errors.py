"""Exception hierarchy for the Seesaw driver."""


class SeesawError(Exception):
    """Base exception for all Seesaw driver errors."""

    pass


class SchemaError(SeesawError, ValueError):
    """Raised for an unknown bit-field key or a pin lacking a capability."""

    pass


class CapabilityError(SeesawError, RuntimeError):
    """Raised when an operation needs a resolved chip model but has none.

    Call ``detect_hardware()`` or pass a model to the device first.
    """

    pass


class UnknownDeviceError(SeesawError, LookupError):
    """Raised when a chip identifier is not present in the model registry."""

    pass


class TransportError(SeesawError, OSError):
    """Raised when an I2C bus write or read fails.

    Never retried: the register-select write of a failed read has already
    had its side effect on the chip.
    """

    pass

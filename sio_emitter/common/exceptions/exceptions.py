# sio_emitter/common/exceptions/exceptions.py
# =============================================================================
# Custom exceptions for the socket.io Redis emitter
# =============================================================================


class EmitterException(Exception):
    """Base exception for the emitter"""
    pass


class UnencodableValue(EmitterException):
    """Raised when an event argument cannot be represented in the packet encoding"""

    def __init__(self, message: str, value_type: str = None):
        super().__init__(message)
        self.value_type = value_type


class TransportError(EmitterException):
    """Raised when publishing a packet to the bus fails

    The underlying client exception is kept as ``__cause__``.
    """

    def __init__(self, message: str, channel: str = None):
        super().__init__(message)
        self.channel = channel


class PacketDecodeError(EmitterException):
    """Raised when a frame cannot be decoded as an event broadcast packet"""
    pass

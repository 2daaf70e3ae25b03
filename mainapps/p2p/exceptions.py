class P2pTransferError(Exception):
    """Base class for failures raised by the P2P settlement layer."""

    default_message = 'P2P transfer operation failed'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidTransition(P2pTransferError):
    """The requested event is not allowed from the transfer's current status."""

    def __init__(self, status, event, message=None):
        self.status = status
        self.event = event
        super().__init__(
            message or f"This action is no longer available: cannot {event} a transfer that is {status}"
        )


class ConcurrentModification(P2pTransferError):
    """Another actor changed the transfer between read and write."""

    default_message = 'This action is no longer available: the transfer was updated by someone else'


class TransferNotAllowed(P2pTransferError):
    """The order cannot open a P2P transfer in its current state."""

    default_message = 'A P2P transfer cannot be opened for this order'


class ConfigurationMissing(P2pTransferError):
    def __init__(self, key, message=None):
        self.key = key
        super().__init__(message or f"Setting '{key}' is missing or not a whole number")

class IllegalTransitionError(RuntimeError):
    """Raised when a handler attempts a step change or context outside the state machine tables."""
    pass


class IncompleteOrderError(RuntimeError):
    """Raised when an order is requested from a context missing any required field."""
    pass

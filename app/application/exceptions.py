class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM adapter violates contract (bad format or missing data)."""
    pass


class TranscriptionError(RuntimeError):
    """Raised when a voice message cannot be turned into text at all."""
    pass


class ChannelError(RuntimeError):
    """Raised when the messaging channel rejects a send or a media download."""
    pass


class ProductNotFoundError(LookupError):
    """Raised when the product referenced by a conversation no longer exists."""
    pass


class ConcurrentUpdateError(RuntimeError):
    """Raised when a conversation save loses a compare-and-set against a newer version."""
    pass

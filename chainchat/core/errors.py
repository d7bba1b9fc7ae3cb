class ChatError(Exception):
    """Base class for failures surfaced by the /chat handler."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClassificationUnknown(ChatError):
    status_code = 400

    def __init__(self, message: str = "Unknown action"):
        super().__init__(message)


class ValidationFailure(ChatError):
    status_code = 400

    def __init__(self, message: str = "Invalid request for balance"):
        super().__init__(message)


class AdapterError(ChatError):
    """Any failure coming back from the chain or the balance provider."""


class ResourceNotFound(AdapterError):
    pass


class NetworkError(AdapterError):
    pass


class ProviderError(AdapterError):
    def __init__(self, detail: str):
        super().__init__(f"Failed to fetch balance: {detail}")


class InvalidKey(AdapterError):
    pass


class SubmissionError(AdapterError):
    pass


class ConfirmationTimeout(AdapterError):
    pass

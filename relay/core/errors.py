# every failure the relay reports to a client derives from RelayError;
# the exception handler in main.py turns it into {"ok": false, "error": ...}


class RelayError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(RelayError):
    status_code = 500


class EmptyConversationError(RelayError):
    status_code = 400

    def __init__(self, message: str = "message is required") -> None:
        super().__init__(message)

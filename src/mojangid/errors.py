class MojangIdError(Exception):
    """Base exception for all mojangid errors."""


class InvalidArgumentError(MojangIdError, ValueError):
    """Raised for caller input that can never produce a valid request."""


class InvalidUsernameError(InvalidArgumentError):
    def __init__(self, username: object) -> None:
        self.username = username
        super().__init__(f"Invalid username '{username}'")


class MojangAPIError(MojangIdError):
    """A request to the Mojang API could not be completed."""

    def __init__(self, message: str, url: str) -> None:
        self.url = url
        super().__init__(message)


class TransportError(MojangAPIError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Could not complete a request to {url}", url)


class BadStatusError(MojangAPIError):
    def __init__(self, url: str, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        self.message = message
        detail = f"Bad response code received: {status_code}"
        if message:
            detail = f"{detail}. {message}"
        super().__init__(detail, url)


class ParseError(MojangAPIError):
    def __init__(self, url: str, detail: str = "") -> None:
        message = f"Could not parse the payload received from {url}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, url)

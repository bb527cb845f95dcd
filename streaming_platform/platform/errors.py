from enum import IntEnum


class ErrorCode(IntEnum):
    NOT_AUTHORIZED = 100
    CONTENT_EXISTS = 101
    CONTENT_NOT_FOUND = 102
    INVALID_FEE = 103
    INVALID_DURATION = 104
    SELF_SUBSCRIPTION = 105
    ALREADY_SUBSCRIBED = 106
    NOT_SUBSCRIBED = 107
    INVALID_RATING = 108
    PLAYLIST_NOT_FOUND = 109
    ALREADY_RATED = 110
    PLAYLIST_EXISTS = 111
    ALREADY_PURCHASED = 112
    ALREADY_IN_PLAYLIST = 113

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


_HTTP_STATUS = {
    ErrorCode.NOT_AUTHORIZED: 403,
    ErrorCode.CONTENT_NOT_FOUND: 404,
    ErrorCode.PLAYLIST_NOT_FOUND: 404,
    ErrorCode.CONTENT_EXISTS: 409,
    ErrorCode.ALREADY_SUBSCRIBED: 409,
    ErrorCode.ALREADY_RATED: 409,
    ErrorCode.PLAYLIST_EXISTS: 409,
    ErrorCode.ALREADY_PURCHASED: 409,
    ErrorCode.ALREADY_IN_PLAYLIST: 409,
    ErrorCode.NOT_SUBSCRIBED: 402,
}


class ContractError(Exception):
    """A contract call rejected by one of the platform rules.

    Rendered as ``(err u<code>)`` inside a block receipt, or as an HTTP error
    response when raised from a REST route.
    """

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(f"{code.label} (u{int(code)})")
        self.code = code

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS.get(self.code, 400)


class CallError(ValueError):
    """A malformed contract call: unknown function, bad literal or wrong arity."""

from enum import StrEnum


class ReasonCode(StrEnum):
    TOKEN_MALFORMED = "TOKEN_MALFORMED"
    TOKEN_SIGNATURE_INVALID = "TOKEN_SIGNATURE_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_ISSUED_IN_FUTURE = "TOKEN_ISSUED_IN_FUTURE"

"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class JWTError(UtilError):
    """Session token is missing, malformed, expired or badly signed."""

    pass

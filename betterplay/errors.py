"""Error taxonomy shared by services and routes.

Services raise these; the handlers registered in ``create_app`` turn them
into ``{"error": message}`` JSON bodies with the matching status code.
"""


class BetterPlayError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(BetterPlayError):
    status_code = 400


class ParseError(ValidationError):
    """A time-of-day string that matches none of the accepted formats."""


class AuthError(BetterPlayError):
    status_code = 401


class ForbiddenError(BetterPlayError):
    status_code = 403


class NotFoundError(BetterPlayError):
    status_code = 404


class ConflictError(BetterPlayError):
    status_code = 409

"""Recoverable failures raised by the account, event and certificate services."""


class CertifyError(Exception):
    """Base class for domain errors."""


class DuplicateEmail(CertifyError):
    pass


class InvalidCredentials(CertifyError):
    pass


class NotAuthenticated(CertifyError):
    pass


class NotFound(CertifyError):
    pass


class NoEligibleRecipient(CertifyError):
    pass

class DomainError(Exception):
    """Base class for errors raised by use cases."""


class NotFoundError(DomainError):
    pass


class TimeNotFoundError(NotFoundError):
    pass


class ThemeNotFoundError(NotFoundError):
    pass


class ReservationNotFoundError(NotFoundError):
    pass


class MemberNotFoundError(NotFoundError):
    pass


class PreviousTimeError(DomainError):
    """The requested date and time is not after the current moment."""


class DuplicatedError(DomainError):
    pass


class ReservationDuplicatedError(DuplicatedError):
    """A reservation already holds the same date, time and theme."""


class TimeDuplicatedError(DuplicatedError):
    pass


class MemberDuplicatedError(DuplicatedError):
    pass


class InUseError(DomainError):
    """The row is still referenced by reservations and cannot be deleted."""


class TimeInUseError(InUseError):
    pass


class ThemeInUseError(InUseError):
    pass


class AuthenticationError(DomainError):
    pass

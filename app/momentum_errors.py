# momentum_errors.py
# Typed failures for the momentum engine and its data source
# All inherit ValueError: invalid data is still invalid data


class MomentumError(ValueError):
    """Base class for every failure raised by the momentum engine."""


class InsufficientData(MomentumError):
    """No observations at all. A short series is NOT this error."""


class DataIntegrityError(MomentumError):
    """Malformed observation: bad price, bad date, impossible ordering."""


class PreconditionViolation(MomentumError):
    """A caller bypassed the normalizer and broke the engine's input contract."""


# === Data retrieval collaborator ===
#
# Raised only by price_source.py. The core never raises or retries these,
# it lets them reach the caller untouched.

class DataRetrievalError(MomentumError):
    """Base class for price source failures."""


class RateLimitExceeded(DataRetrievalError):
    pass


class InvalidSymbol(DataRetrievalError):
    pass


class NoDataFound(DataRetrievalError):
    pass


class TransportFailure(DataRetrievalError):
    pass

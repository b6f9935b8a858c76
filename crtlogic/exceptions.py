class CRTError(Exception): ...


class CanonError(CRTError): ...


class IngestError(CRTError): ...


class PricingError(CRTError): ...


class UnknownVoltageLevel(PricingError, ValueError): ...


class InvalidMonth(CRTError, ValueError): ...


def require(condition: bool, message: str, exc: type[CRTError] = CRTError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)

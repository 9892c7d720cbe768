# weathernav/core/errors.py


class WeatherNavError(Exception):
    """
    Base class for all errors raised by weathernav.
    """


class InvalidInputError(WeatherNavError, ValueError):
    """
    A precondition of a pipeline function was violated by the caller
    (empty geometry, zero-duration route, empty readings list, ...).
    """


class ProviderError(WeatherNavError):
    """
    An upstream provider (geocoding, routing, weather) failed and no
    fallback was available.
    """

from .criteria import FilterCriteria
from .enums import CurrentType
from .errors import InvalidRequestError, UpstreamUnavailableError
from .stations import Station

__all__ = [
    "Station",
    "FilterCriteria",
    "CurrentType",
    "InvalidRequestError",
    "UpstreamUnavailableError",
]

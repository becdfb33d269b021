"""Client SDK for the Blocktrail blockchain data API.

Usage example:
    from blocktrail import BlocktrailClient, to_major_unit_string
    client = BlocktrailClient.from_env()
    info = client.address('1NcXPMRaanz43b1kokpPuYDdk6GGDvxT2T')
    print(to_major_unit_string(info['balance']))
"""
__version__ = '0.1.0'

from .exceptions import (  # noqa: E402,F401
    ApiConfigError,
    ApiRequestError,
    ApiTransportError,
    ConversionError,
    ErrorKind,
    Failure,
    Success,
)
from .conversion import (  # noqa: E402,F401
    to_major_unit,
    to_major_unit_string,
    to_smallest_unit,
    to_smallest_unit_string,
)
from .classifier import classify  # noqa: E402,F401
from .client import BlocktrailClient  # noqa: E402,F401

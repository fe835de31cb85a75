from pingu_sdk.pingu_rpc.utils.converters import bps_to_decimal, from_scaled, to_scaled
from pingu_sdk.pingu_rpc.utils.errors import ClassifiedError, ErrorKind, classify, parse_contract_error

__all__ = [
    "bps_to_decimal",
    "from_scaled",
    "to_scaled",
    "ClassifiedError",
    "ErrorKind",
    "classify",
    "parse_contract_error",
]

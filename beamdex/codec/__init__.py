"""Binary argument codec and per-function schemas."""

from beamdex.codec import schemas
from beamdex.codec.args import Args, ArgsReader, encode_int
from beamdex.codec.schemas import (
    Schema,
    decode_raw_string,
    decode_record_list,
    decode_value,
    encode_record_list,
    encode_value,
)

__all__ = [
    "Args",
    "ArgsReader",
    "Schema",
    "decode_raw_string",
    "decode_record_list",
    "decode_value",
    "encode_int",
    "encode_record_list",
    "encode_value",
    "schemas",
]

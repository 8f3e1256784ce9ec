"""Variable-length integer encoding for database key suffixes.

Little-endian base-128: each byte carries seven payload bits, and the high
bit is set on every byte except the last.
"""


def encode_varint(value: int) -> bytes:
    """Encode a non-negative integer.

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")

    result = bytearray()
    while True:
        low = value & 0x7F
        value >>= 7
        if value:
            result.append(low | 0x80)
        else:
            result.append(low)
            return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode a varint starting at offset.

    Returns:
        Tuple of (decoded_value, bytes_consumed)

    Raises:
        ValueError: If the data ends before the last byte of the varint
    """
    value = 0
    shift = 0
    position = offset
    while True:
        if position >= len(data):
            raise ValueError(f"Truncated varint at offset {offset}")
        byte = data[position]
        value |= (byte & 0x7F) << shift
        position += 1
        if not byte & 0x80:
            return value, position - offset
        shift += 7

# Purpose: CRC-16 checksum for the PromptPay payload (tag 63).

POLYNOMIAL = 0x1021
CRC_TAG = "63"
CRC_LENGTH = 4


def crc16(data, initial):
    """Bitwise CRC-16 with polynomial 0x1021, no reflection and no final XOR."""
    if isinstance(data, str):
        data = data.encode('utf-8')

    crc = initial
    for byte in data:
        crc ^= (byte << 8)
        for _ in range(8):
            if (crc & 0x8000):
                crc = (crc << 1) ^ POLYNOMIAL
            else:
                crc = crc << 1
            crc &= 0xFFFF
    return crc


def crc16_xmodem(data):
    """Calculates the CRC-16/XMODEM (0x0000, 0x1021)."""
    return crc16(data, 0x0000)


def crc16_ccitt_false(data):
    """Calculates the CRC-16/CCITT-FALSE (0xFFFF, 0x1021) used by deployed EMV QR readers."""
    return crc16(data, 0xFFFF)


def _build_table():
    # Entry n is the register after feeding byte n into a zeroed register.
    return [crc16_xmodem(bytes([n])) for n in range(256)]


_TABLE = _build_table()


def crc16_xmodem_table(data):
    """Table-driven CRC-16/XMODEM, same result as crc16_xmodem."""
    if isinstance(data, str):
        data = data.encode('utf-8')

    crc = 0x0000
    for byte in data:
        crc = ((crc << 8) & 0xFFFF) ^ _TABLE[((crc >> 8) ^ byte) & 0xFF]
    return crc


def format_crc(value):
    return f"{value:04X}"


def verify_checksum(payload, checksum=crc16_xmodem):
    """Checks that the trailing tag 63 holds the CRC of everything before it."""
    if len(payload) < 8 or payload[-8:-4] != CRC_TAG + f"{CRC_LENGTH:02}":
        return False
    return format_crc(checksum(payload[:-4])) == payload[-4:]

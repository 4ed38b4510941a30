# Purpose: Assemble the PromptPay credit-transfer payload (EMV merchant presented mode).

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from promptpay_crc import CRC_LENGTH, CRC_TAG, crc16_xmodem, format_crc
from promptpay_errors import AmountOutOfRange
from promptpay_ids import PhoneNumber, normalize

# --- REGISTRY ---
TAG_PAYLOAD_FORMAT = "00"
TAG_POINT_OF_INITIATION = "01"
TAG_MERCHANT_ACCOUNT = "29"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY = "58"

PAYLOAD_FORMAT = "01"
STATIC_QR = "11"
DYNAMIC_QR = "12"
PROMPTPAY_AID = "A000000677010111"
CURRENCY_THB = "764"
COUNTRY_TH = "TH"

# Sub-tags of tag 29
SUBTAG_AID = "00"
SUBTAG_PHONE = "01"
SUBTAG_NATIONAL_ID = "02"
PHONE_COUNTRY_PREFIX = "0066"

AMOUNT_MAX_DIGITS = 13


def tlv(tag, value):
    if len(value) > 99:
        raise ValueError(f"Value for tag {tag} is {len(value)} characters, the limit is 99")
    return f"{tag}{len(value):02}{value}"


def to_minor_units(amount):
    """Converts an amount in baht to satang, rounding half up.

    Floats go through ``str`` so that 0.005 is read as the decimal 0.005 and
    rounds to 1 satang.
    """
    if isinstance(amount, bool):
        raise AmountOutOfRange(amount, "not a number")
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise AmountOutOfRange(amount, "not a number") from None

    if not value.is_finite():
        raise AmountOutOfRange(amount, "not a finite number")
    if value < 0:
        raise AmountOutOfRange(amount, "negative amounts are not allowed")

    try:
        minor = int(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP).scaleb(2))
    except InvalidOperation:
        raise AmountOutOfRange(amount, f"exceeds {AMOUNT_MAX_DIGITS} digits") from None

    if len(str(minor)) > AMOUNT_MAX_DIGITS:
        raise AmountOutOfRange(amount, f"exceeds {AMOUNT_MAX_DIGITS} digits")
    return minor


def merchant_account_info(identifier):
    """Builds the tag 29 value: the PromptPay AID followed by exactly one proxy field."""
    digits = normalize(identifier)
    if isinstance(identifier, PhoneNumber):
        proxy = tlv(SUBTAG_PHONE, PHONE_COUNTRY_PREFIX + digits)
    else:
        proxy = tlv(SUBTAG_NATIONAL_ID, digits)
    return tlv(SUBTAG_AID, PROMPTPAY_AID) + proxy


def build(identifier, amount=None):
    """Constructs every field up to and including the CRC tag and length ("6304").

    The returned string is the exact input to the checksum.
    """
    account = merchant_account_info(identifier)
    minor = None if amount is None else to_minor_units(amount)

    data = [
        tlv(TAG_PAYLOAD_FORMAT, PAYLOAD_FORMAT),
        tlv(TAG_POINT_OF_INITIATION, STATIC_QR if minor is None else DYNAMIC_QR),
        tlv(TAG_MERCHANT_ACCOUNT, account),
        tlv(TAG_COUNTRY, COUNTRY_TH),
        tlv(TAG_CURRENCY, CURRENCY_THB),
    ]
    if minor is not None:
        data.append(tlv(TAG_AMOUNT, str(minor)))

    return "".join(data) + CRC_TAG + f"{CRC_LENGTH:02}"


def generate_payload(identifier, amount=None, checksum=crc16_xmodem):
    raw_str = build(identifier, amount)
    return raw_str + format_crc(checksum(raw_str))

# Purpose: Validate and canonicalize PromptPay recipient identifiers.

import re
from dataclasses import dataclass
from typing import Union

from promptpay_errors import InvalidNationalId, InvalidPhoneNumber, MissingIdentifier

PHONE_DIGITS = 9
NATIONAL_ID_DIGITS = 13

# Accepted prefix forms for a Thai mobile number, checked against the digit-only string.
# Each entry is (prefix, total length including the prefix).
PHONE_PREFIXES = [
    ("0066", 4 + PHONE_DIGITS),
    ("66", 2 + PHONE_DIGITS),
    ("0", 1 + PHONE_DIGITS),
    ("", PHONE_DIGITS),
]


@dataclass(frozen=True)
class PhoneNumber:
    raw: str


@dataclass(frozen=True)
class NationalID:
    raw: str


RecipientIdentifier = Union[PhoneNumber, NationalID]


def sanitize_phone_number(phone_number: str) -> str:
    """Returns the 9 significant digits of a Thai mobile number.

    Spaces, hyphens, plus signs and parentheses are dropped, then exactly one
    recognized prefix ("0066", "66" or the trunk "0") is removed. A number that
    carries more than one prefix, e.g. "+66 0 81...", is rejected.
    """
    if not isinstance(phone_number, str):
        raise InvalidPhoneNumber(phone_number)
    digits = re.sub(r"[^0-9]", "", phone_number)

    for prefix, total in PHONE_PREFIXES:
        if len(digits) == total and digits.startswith(prefix):
            rest = digits[len(prefix):]
            # A second trunk zero after the prefix means stacked prefixes.
            if prefix and rest.startswith("0"):
                break
            return rest

    raise InvalidPhoneNumber(phone_number)


def sanitize_national_id(national_id: str) -> str:
    """Returns the 13-digit national ID with its hyphens removed."""
    if not isinstance(national_id, str):
        raise InvalidNationalId(national_id)
    sanitized = national_id.replace("-", "")

    if not re.fullmatch(r"[0-9]{%d}" % NATIONAL_ID_DIGITS, sanitized):
        raise InvalidNationalId(national_id)
    return sanitized


def normalize(identifier: RecipientIdentifier) -> str:
    if isinstance(identifier, PhoneNumber):
        return sanitize_phone_number(identifier.raw)
    if isinstance(identifier, NationalID):
        return sanitize_national_id(identifier.raw)
    raise MissingIdentifier(identifier)

# Purpose: Command-line PromptPay payload generator.
# Writes the payload string; rendering it as an image is left to a QR renderer.

import argparse
import sys

from promptpay_crc import crc16_ccitt_false, crc16_xmodem
from promptpay_errors import PayloadError
from promptpay_ids import NationalID, PhoneNumber
from promptpay_payload import generate_payload

# --- CONFIGURATION ---
QR_TEXT_FILE = "qrcode.txt"


def build_parser():
    parser = argparse.ArgumentParser(description="PromptPay QR Payload Generator")
    recipient = parser.add_mutually_exclusive_group(required=True)
    recipient.add_argument("--phone", help="Recipient mobile number, e.g. 081-234-5678 or +66812345678")
    recipient.add_argument("--national-id", help="Recipient 13-digit national ID, hyphens allowed")
    parser.add_argument("--amount", help="Amount in baht. Omit for a reusable (static) code")
    parser.add_argument("--ccitt-false", action="store_true",
                        help="Use the CRC-16/CCITT-FALSE checksum (initial value 0xFFFF) instead of XMODEM.")
    parser.add_argument("--output", default=QR_TEXT_FILE, help=f"Output text file (default: {QR_TEXT_FILE})")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.phone is not None:
        identifier = PhoneNumber(args.phone)
    else:
        identifier = NationalID(args.national_id)
    checksum = crc16_ccitt_false if args.ccitt_false else crc16_xmodem

    print(f"[*] Building payload for {identifier}")
    try:
        payload = generate_payload(identifier, args.amount, checksum=checksum)
    except PayloadError as e:
        print(f"[!] Error: {e}")
        return 1

    with open(args.output, "w") as f:
        f.write(payload)
    print(f"[*] Raw QR string saved to '{args.output}'.")
    print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())

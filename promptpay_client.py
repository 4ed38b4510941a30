# Purpose: Exercise a running promptpay_server.py from the command line.

import argparse
import json

import requests

# --- CONFIGURATION ---
PORT = 5020
HOST = "127.0.0.1"
BASE_URL = f"http://{HOST}:{PORT}"


def _post(url, body):
    print(f"PROMPTPAY_CLIENT: [*] Sending POST request to {url}")
    try:
        response = requests.post(url, json=body)
    except requests.exceptions.ConnectionError:
        print(f"PROMPTPAY_CLIENT: [!] Error: Could not connect to {url}. Is promptpay_server.py running?")
        return None

    print(f"PROMPTPAY_CLIENT: [*] Status Code: {response.status_code}")
    try:
        resp_json = response.json()
        print("PROMPTPAY_CLIENT: [*] Response Body:")
        print(json.dumps(resp_json, indent=4))
        return resp_json
    except ValueError:
        print("PROMPTPAY_CLIENT: [*] Response Body (Text):")
        print(response.text)
        return None


def request_generate(phone=None, national_id=None, amount=None, checksum=None, base_url=BASE_URL):
    body = {}
    if phone is not None:
        body["phoneNumber"] = phone
    if national_id is not None:
        body["nationalId"] = national_id
    if amount is not None:
        body["amount"] = amount
    if checksum is not None:
        body["checksum"] = checksum
    return _post(f"{base_url}/generate", body)


def request_verify(payload, checksum=None, base_url=BASE_URL):
    body = {"payload": payload}
    if checksum is not None:
        body["checksum"] = checksum
    return _post(f"{base_url}/verify", body)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Utility for the PromptPay Payload Server")
    parser.add_argument("--generate", action="store_true", help="Request a new payload")
    parser.add_argument("--verify", help="Payload string to check")
    parser.add_argument("--phone", help="Recipient mobile number for --generate")
    parser.add_argument("--national-id", help="Recipient national ID for --generate")
    parser.add_argument("--amount", help="Amount in baht for --generate")
    parser.add_argument("--checksum", choices=["xmodem", "ccitt-false"], help="Checksum variant")
    parser.add_argument("--base-url", default=BASE_URL, help=f"Server base URL (default: {BASE_URL})")
    args = parser.parse_args(argv)

    if args.generate:
        request_generate(args.phone, args.national_id, args.amount, args.checksum, base_url=args.base_url)
    elif args.verify:
        request_verify(args.verify, args.checksum, base_url=args.base_url)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

# Purpose: HTTP service that builds PromptPay payloads for a QR renderer.
# Every request is handled on its own; nothing is stored between requests.

import argparse
import os

import referencing
import yaml
from flask import Flask, jsonify, request
from flask_cors import CORS
from jsonschema import Draft7Validator
from referencing.jsonschema import DRAFT7

from promptpay_crc import crc16_ccitt_false, crc16_xmodem, verify_checksum
from promptpay_errors import MissingIdentifier, PayloadError
from promptpay_ids import NationalID, PhoneNumber
from promptpay_payload import generate_payload

# --- CONFIGURATION ---
PORT = 5020
HOST = "127.0.0.1"
SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "api", "openapi.yaml")
SCHEMA_URI = "http://promptpay/openapi.yaml"

CHECKSUMS = {
    "xmodem": crc16_xmodem,
    "ccitt-false": crc16_ccitt_false,
}

app = Flask(__name__)
CORS(app)


def load_schema_registry(path=None):
    """Loads the OpenAPI document into a referencing registry. Returns None when the file is absent."""
    path = path or SCHEMA_PATH
    if not os.path.exists(path):
        return None
    with open(path, 'r') as f:
        document = yaml.safe_load(f)
    resource = referencing.Resource.from_contents(document, default_specification=DRAFT7)
    return referencing.Registry().with_resource(uri=SCHEMA_URI, resource=resource)


def validate_against_schema(data, schema_name):
    """Validates JSON against a component schema of api/openapi.yaml and returns the error messages."""
    registry = load_schema_registry()
    if registry is None:
        return []
    target_schema = {"$ref": f"{SCHEMA_URI}#/components/schemas/{schema_name}"}
    validator = Draft7Validator(target_schema, registry=registry)
    errors = [e.message for e in validator.iter_errors(data)]
    if errors:
        print(f"PROMPTPAY_SERVER: [!] Schema Validation Error ({schema_name}): {errors[0]}")
    else:
        print(f"PROMPTPAY_SERVER: [OK] JSON validated against {schema_name}")
    return errors


def identifier_from_request(data):
    """Maps the request's recipient field onto a PhoneNumber or NationalID."""
    phone = data.get("phoneNumber")
    national_id = data.get("nationalId")
    if phone is not None and national_id is None:
        return PhoneNumber(phone)
    if national_id is not None and phone is None:
        return NationalID(national_id)
    raise MissingIdentifier()


@app.route('/generate', methods=['POST'])
def generate():
    """
    Receives a recipient (phone number or national ID) and an optional amount,
    and returns the complete payload string ending in its CRC.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        print("PROMPTPAY_SERVER: [!] Received invalid JSON payload")
        return jsonify({"error": "Invalid JSON", "field": None, "message": "Request body must be a JSON object"}), 400

    print("PROMPTPAY_SERVER: [*] Received payload generation request")
    errors = validate_against_schema(data, "GenerateRequest")
    if errors:
        return jsonify({"error": "SchemaValidationError", "field": None, "message": errors[0]}), 400

    name = data.get("checksum", "xmodem")
    checksum = CHECKSUMS.get(name) if isinstance(name, str) else None
    if checksum is None:
        return jsonify({"error": "UnknownChecksum", "field": "checksum", "message": f"Unknown checksum {data['checksum']!r}"}), 400
    try:
        identifier = identifier_from_request(data)
        payload = generate_payload(identifier, data.get("amount"), checksum=checksum)
    except PayloadError as e:
        print(f"PROMPTPAY_SERVER: [!] {type(e).__name__}: {e}")
        return jsonify(e.to_dict()), 400
    except Exception as e:
        print(f"PROMPTPAY_SERVER: [!] Exception: {e}")
        return jsonify({"error": str(e)}), 500

    response_data = {
        "payload": payload,
        "crc": payload[-4:],
        "pointOfInitiation": payload[10:12],
    }
    validate_against_schema(response_data, "GenerateResponse")
    print(f"PROMPTPAY_SERVER: [*] Generated payload {payload}")
    return jsonify(response_data)


@app.route('/verify', methods=['POST'])
def verify():
    """Recomputes the CRC of a payload and compares it with the trailing tag 63."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON", "field": None, "message": "Request body must be a JSON object"}), 400

    errors = validate_against_schema(data, "VerifyRequest")
    if errors:
        return jsonify({"error": "SchemaValidationError", "field": None, "message": errors[0]}), 400

    name = data.get("checksum", "xmodem")
    checksum = CHECKSUMS.get(name) if isinstance(name, str) else None
    payload = data.get("payload")
    if checksum is None or not isinstance(payload, str):
        return jsonify({"error": "InvalidRequest", "field": None, "message": "A payload string and a known checksum are required"}), 400

    valid = verify_checksum(payload, checksum=checksum)
    print(f"PROMPTPAY_SERVER: [*] CRC check {'passed' if valid else 'failed'}")
    return jsonify({"valid": valid})


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="PromptPay Payload Server")
    parser.add_argument("--host", default=HOST, help=f"Interface to bind (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})")
    args = parser.parse_args()

    print(f"PROMPTPAY_SERVER: Starting Payload Server on port {args.port}...")
    app.run(host=args.host, port=args.port)

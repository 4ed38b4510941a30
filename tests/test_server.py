import promptpay_server
from promptpay_crc import verify_checksum


def test_generate_phone_with_amount(client):
    resp = client.post("/generate", json={"phoneNumber": "+66-812345678", "amount": 123.45})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["payload"].endswith("540512345630433E3")
    assert body["crc"] == "33E3"
    assert body["pointOfInitiation"] == "12"
    assert verify_checksum(body["payload"])


def test_generate_national_id_static(client):
    resp = client.post("/generate", json={"nationalId": "1234567890123"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["crc"] == "B459"
    assert body["pointOfInitiation"] == "11"


def test_generate_amount_as_string(client):
    resp = client.post("/generate", json={"nationalId": "1234567890123", "amount": "123.45"})
    assert resp.get_json()["crc"] == "1787"


def test_generate_ccitt_false(client):
    resp = client.post("/generate", json={"phoneNumber": "0812345678", "checksum": "ccitt-false"})
    assert resp.status_code == 200
    assert resp.get_json()["crc"] == "5D82"


def test_generate_invalid_phone(client):
    resp = client.post("/generate", json={"phoneNumber": "12345"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "InvalidPhoneNumber"
    assert body["field"] == "phoneNumber"
    assert "9 digits" in body["message"]


def test_generate_invalid_national_id(client):
    resp = client.post("/generate", json={"nationalId": "12345678901"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidNationalId"


def test_generate_negative_amount(client):
    resp = client.post("/generate", json={"phoneNumber": "0812345678", "amount": -1.0})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "AmountOutOfRange"
    assert body["field"] == "amount"


def test_generate_requires_exactly_one_identifier(client):
    both = client.post("/generate", json={"phoneNumber": "0812345678", "nationalId": "1234567890123"})
    neither = client.post("/generate", json={"amount": 10})
    assert both.status_code == 400
    assert neither.status_code == 400
    assert both.get_json()["error"] == "SchemaValidationError"


def test_generate_rejects_unknown_fields_and_checksums(client):
    assert client.post("/generate", json={"phoneNumber": "0812345678", "memo": "x"}).status_code == 400
    assert client.post("/generate", json={"phoneNumber": "0812345678", "checksum": "crc32"}).status_code == 400


def test_generate_rejects_non_object_body(client):
    assert client.post("/generate", data="not json", content_type="application/json").status_code == 400
    assert client.post("/generate", json=["0812345678"]).status_code == 400


def test_missing_identifier_without_schema(client, monkeypatch, tmp_path):
    monkeypatch.setattr(promptpay_server, "SCHEMA_PATH", str(tmp_path / "missing.yaml"))
    resp = client.post("/generate", json={"amount": 10})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "MissingIdentifier"


def test_verify(client):
    payload = client.post("/generate", json={"phoneNumber": "0812345678"}).get_json()["payload"]
    assert client.post("/verify", json={"payload": payload}).get_json() == {"valid": True}

    tampered = payload.replace("0066812345678", "0066812345679")
    assert tampered != payload
    assert client.post("/verify", json={"payload": tampered}).get_json() == {"valid": False}


def test_verify_requires_payload(client):
    assert client.post("/verify", json={}).status_code == 400


def test_requests_are_independent(client):
    first = client.post("/generate", json={"phoneNumber": "0812345678", "amount": 5}).get_json()
    client.post("/generate", json={"nationalId": "1234567890123"})
    again = client.post("/generate", json={"phoneNumber": "0812345678", "amount": 5}).get_json()
    assert first == again


def test_non_string_checksum_without_schema(client, monkeypatch, tmp_path):
    monkeypatch.setattr(promptpay_server, "SCHEMA_PATH", str(tmp_path / "missing.yaml"))
    gen = client.post("/generate", json={"phoneNumber": "0812345678", "checksum": ["xmodem"]})
    assert gen.status_code == 400
    assert gen.get_json()["error"] == "UnknownChecksum"

    ver = client.post("/verify", json={"payload": "6304059B", "checksum": {"name": "xmodem"}})
    assert ver.status_code == 400
    assert ver.get_json()["error"] == "InvalidRequest"

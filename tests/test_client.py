import requests

import promptpay_client


class _Response:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body
        self.text = str(body)

    def json(self):
        if self._body is None:
            raise ValueError("no JSON")
        return self._body


def test_request_generate_builds_body(monkeypatch):
    calls = []

    def fake_post(url, json=None):
        calls.append((url, json))
        return _Response(200, {"payload": "x", "crc": "0000", "pointOfInitiation": "12"})

    monkeypatch.setattr(promptpay_client.requests, "post", fake_post)
    result = promptpay_client.request_generate(phone="0812345678", amount="10", base_url="http://svc")

    assert calls == [("http://svc/generate", {"phoneNumber": "0812345678", "amount": "10"})]
    assert result["crc"] == "0000"


def test_request_verify_text_response(monkeypatch, capsys):
    monkeypatch.setattr(promptpay_client.requests, "post", lambda url, json=None: _Response(500, None))
    assert promptpay_client.request_verify("abc", base_url="http://svc") is None
    assert "Response Body (Text)" in capsys.readouterr().out


def test_connection_error(monkeypatch, capsys):
    def refuse(url, json=None):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(promptpay_client.requests, "post", refuse)
    assert promptpay_client.request_generate(national_id="1234567890123") is None
    assert "Could not connect" in capsys.readouterr().out


def test_main_dispatches_verify(monkeypatch):
    seen = []
    monkeypatch.setattr(promptpay_client, "request_verify", lambda *a, **kw: seen.append((a, kw)))
    promptpay_client.main(["--verify", "PAYLOAD", "--checksum", "ccitt-false", "--base-url", "http://svc"])
    assert seen == [(("PAYLOAD", "ccitt-false"), {"base_url": "http://svc"})]

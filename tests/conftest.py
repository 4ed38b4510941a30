"""Shared fixtures for the PromptPay payload tests."""

from __future__ import annotations

import pytest

import promptpay_server


@pytest.fixture()
def client():
    """Flask test client for the payload service."""

    promptpay_server.app.config.update(TESTING=True)
    with promptpay_server.app.test_client() as c:
        yield c

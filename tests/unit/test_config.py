import pytest

from sio_capture.config import PAYPAL_LIVE_BASE, PAYPAL_SANDBOX_BASE, load_settings


@pytest.fixture
def paypal_env(monkeypatch):
    monkeypatch.setenv("PAYPAL_CLIENT_ID_SANDBOX", "sb-id")
    monkeypatch.setenv("PAYPAL_CLIENT_SECRET_SANDBOX", "sb-secret")
    monkeypatch.setenv("PAYPAL_CLIENT_ID_LIVE", "live-id")
    monkeypatch.setenv("PAYPAL_CLIENT_SECRET_LIVE", "live-secret")
    return monkeypatch


def test_sandbox_selects_sandbox_pair_and_host(paypal_env):
    paypal_env.setenv("PAYPAL_ENV", "sandbox")
    s = load_settings()
    assert s.is_sandbox
    assert (s.paypal_client_id, s.paypal_client_secret) == ("sb-id", "sb-secret")
    assert s.paypal_base_url == PAYPAL_SANDBOX_BASE
    assert s.paypal_mode_label == "SANDBOX"


@pytest.mark.parametrize("value", ["live", "LIVE", "production", ""])
def test_anything_but_sandbox_is_live(paypal_env, value):
    paypal_env.setenv("PAYPAL_ENV", value)
    s = load_settings()
    assert s.paypal_env == "live"
    assert s.paypal_client_id == "live-id"
    assert s.paypal_base_url == PAYPAL_LIVE_BASE


def test_values_are_cleaned_and_defaults_applied(monkeypatch):
    monkeypatch.setenv("SIO_API_KEY", '  "sio-key" ')
    monkeypatch.setenv("SIO_BASE_URL", "https://sio.example/api/")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "abc")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.delenv("CAPTURE_RATE_LIMIT", raising=False)
    s = load_settings()
    assert s.sio_api_key == "sio-key"
    assert s.sio_base_url == "https://sio.example/api"
    assert s.http_timeout_seconds == 20.0
    assert s.cors_origins == ("https://a.example", "https://b.example")
    assert s.capture_rate_limit == 10

"""Tests for wasteflow.auth: passwords, tokens, login throttling, route guard."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from flask import Flask, g, jsonify

from wasteflow.app.errors import RateLimitedError, register_error_handlers
from wasteflow.auth import (
    LoginRateLimiter,
    create_token,
    decode_token,
    hash_password,
    require_distributor_auth,
    verify_password,
)
from wasteflow.models.distributor import Distributor

_SECRET = "test-secret-0123456789abcdef"


def _distributor() -> Distributor:
    return Distributor(
        id=uuid4(),
        name="Green Haulers",
        email="ops@greenhaulers.lk",
        password_hash="x",
        address="Colombo",
    )


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("S3cret", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")


class TestTokens:
    def test_round_trip(self):
        d = _distributor()
        payload = decode_token(create_token(d, _SECRET), _SECRET, 60)
        assert payload == {"distributor_id": str(d.id), "email": d.email}

    def test_wrong_secret(self):
        token = create_token(_distributor(), _SECRET)
        assert decode_token(token, "another-secret-0123456789", 60) is None

    def test_tampered(self):
        token = create_token(_distributor(), _SECRET)
        assert decode_token(token[:-2] + "xx", _SECRET, 60) is None

    def test_expired(self):
        token = create_token(_distributor(), _SECRET)
        assert decode_token(token, _SECRET, -1) is None


class TestLoginRateLimiter:
    def test_locks_out_after_max_attempts(self):
        limiter = LoginRateLimiter(max_attempts=3, window_seconds=60, lockout_seconds=120)
        for _ in range(2):
            limiter.record_failure("1.2.3.4:bob@x.com")
            limiter.check("1.2.3.4:bob@x.com")

        limiter.record_failure("1.2.3.4:bob@x.com")
        with pytest.raises(RateLimitedError) as exc_info:
            limiter.check("1.2.3.4:bob@x.com")

        assert exc_info.value.status == 429
        retry_after = int(exc_info.value.extra_headers["Retry-After"])
        assert 1 <= retry_after <= 120

    def test_keys_are_independent(self):
        limiter = LoginRateLimiter(max_attempts=1)
        limiter.record_failure("a")
        limiter.check("b")

    def test_success_clears_failures(self):
        limiter = LoginRateLimiter(max_attempts=2)
        limiter.record_failure("k")
        limiter.record_success("k")
        limiter.record_failure("k")
        limiter.check("k")

    def test_failures_outside_window_are_forgotten(self):
        limiter = LoginRateLimiter(max_attempts=2, window_seconds=10)
        with patch("wasteflow.auth.time.monotonic", return_value=1000.0):
            limiter.record_failure("k")
        with patch("wasteflow.auth.time.monotonic", return_value=1020.0):
            limiter.record_failure("k")
            limiter.check("k")

    def test_lockout_expires(self):
        limiter = LoginRateLimiter(max_attempts=1, lockout_seconds=30)
        with patch("wasteflow.auth.time.monotonic", return_value=500.0):
            limiter.record_failure("k")
        with patch("wasteflow.auth.time.monotonic", return_value=531.0):
            limiter.check("k")

    def test_from_settings(self):
        settings = SimpleNamespace(
            login_max_attempts=1,
            login_window_seconds=5,
            login_lockout_seconds=7,
        )
        limiter = LoginRateLimiter.from_settings(settings)
        limiter.record_failure("k")
        with pytest.raises(RateLimitedError):
            limiter.check("k")


class TestRequireDistributorAuth:
    def _make_app(self, distributor=None):
        container = MagicMock()
        container.settings.auth.token_secret = _SECRET
        container.settings.auth.token_expiry_seconds = 3600
        container.distributors.find_by_id.return_value = distributor

        app = Flask(__name__)
        app.config["TESTING"] = True
        app.extensions["container"] = container
        register_error_handlers(app)

        @app.route("/whoami")
        @require_distributor_auth
        def whoami():
            return jsonify({"email": g.distributor.email})

        return app, container

    def test_valid_token(self):
        d = _distributor()
        app, container = self._make_app(distributor=d)
        with app.test_client() as client:
            resp = client.get(
                "/whoami",
                headers={"Authorization": f"Bearer {create_token(d, _SECRET)}"},
            )
        assert resp.status_code == 200
        assert resp.get_json() == {"email": d.email}
        container.distributors.find_by_id.assert_called_once_with(d.id)

    def test_missing_header(self):
        app, _ = self._make_app()
        with app.test_client() as client:
            resp = client.get("/whoami")
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == "Bearer"
        assert resp.get_json()["success"] is False

    def test_bad_token(self):
        app, _ = self._make_app(distributor=_distributor())
        with app.test_client() as client:
            resp = client.get("/whoami", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 401
        assert resp.get_json()["message"] == "Invalid or expired token"

    def test_distributor_no_longer_exists(self):
        app, _ = self._make_app(distributor=None)
        token = create_token(_distributor(), _SECRET)
        with app.test_client() as client:
            resp = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.get_json()["message"] == "Distributor not found"

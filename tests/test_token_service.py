import unittest
from datetime import datetime, timedelta, timezone

import jwt
from flask import Flask
from flask_jwt_extended import JWTManager

from app.errors import InvalidTokenError, TokenExpiredError
from app.services.token_service import issue_token, verify_token


class TestTokenService(unittest.TestCase):
    def setUp(self):
        self.app = Flask(__name__)
        self.app.config["JWT_SECRET_KEY"] = "test-secret"
        self.app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(days=7)
        JWTManager(self.app)
        self.ctx = self.app.app_context()
        self.ctx.push()

    def tearDown(self):
        self.ctx.pop()

    def test_issued_token_verifies(self):
        token = issue_token(42, "alice@example.com")
        self.assertEqual(
            verify_token(token),
            {"user_id": 42, "email": "alice@example.com"},
        )

    def test_token_expires_after_seven_days(self):
        token = issue_token(1, "alice@example.com")
        claims = jwt.decode(token, "test-secret", algorithms=["HS256"])
        lifetime = claims["exp"] - claims["iat"]
        self.assertEqual(lifetime, 7 * 24 * 60 * 60)

    def test_expired_token_is_rejected(self):
        token = issue_token(1, "alice@example.com", expires_delta=timedelta(seconds=-1))
        with self.assertRaises(TokenExpiredError):
            verify_token(token)

    def test_token_signed_with_other_secret_is_rejected(self):
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {
                "sub": "1",
                "email": "alice@example.com",
                "type": "access",
                "fresh": False,
                "jti": "forged",
                "iat": now,
                "nbf": now,
                "exp": now + timedelta(days=7),
            },
            "another-secret",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            verify_token(forged)

    def test_rotating_secret_invalidates_tokens(self):
        token = issue_token(1, "alice@example.com")
        self.app.config["JWT_SECRET_KEY"] = "rotated-secret"
        with self.assertRaises(InvalidTokenError):
            verify_token(token)

    def test_tampered_token_is_rejected(self):
        token = issue_token(1, "alice@example.com")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with self.assertRaises(InvalidTokenError):
            verify_token(tampered)

    def test_malformed_token_is_rejected(self):
        for value in ["", "   ", "not-a-token", None]:
            with self.assertRaises(InvalidTokenError):
                verify_token(value)

    def test_token_without_email_claim_is_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "type": "access", "iat": now, "nbf": now, "exp": now + timedelta(minutes=5)},
            "test-secret",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            verify_token(token)


if __name__ == "__main__":
    unittest.main()

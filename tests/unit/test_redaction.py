"""Unit tests for icws.core.redaction."""

from icws.core.redaction import REDACTED, redact_dict, redact_secrets


class TestRedactSecrets:
    """Free-text redaction."""

    def test_password_in_json(self):
        text = '{"userID":"agent","password":"1234"}'
        result = redact_secrets(text)
        assert "1234" not in result
        assert '"userID":"agent"' in result

    def test_csrf_token_in_json(self):
        result = redact_secrets('{"csrfToken":"VWFnZW50WAtp","sessionId":"1731001"}')
        assert "VWFnZW50WAtp" not in result
        assert "1731001" in result

    def test_session_cookie(self):
        result = redact_secrets("icws_1731001=f50a9dfa-fada; Path=/icws/1731001")
        assert "f50a9dfa" not in result
        assert "Path=/icws/1731001" in result

    def test_plain_text_unchanged(self):
        assert redact_secrets("GET /icws/S/status -> 200") == "GET /icws/S/status -> 200"


class TestRedactDict:
    """Structured redaction."""

    def test_secret_keys_replaced(self):
        data = {
            "Accept-Language": "en-US",
            "ININ-ICWS-CSRF-Token": "T",
            "Cookie": "icws_S=abc",
            "body": {"password": "1234", "userID": "agent"},
        }
        result = redact_dict(data)

        assert result["Accept-Language"] == "en-US"
        assert result["ININ-ICWS-CSRF-Token"] == REDACTED
        assert result["Cookie"] == REDACTED
        assert result["body"] == {"password": REDACTED, "userID": "agent"}

    def test_original_not_modified(self):
        data = {"password": "1234", "hosts": ["a", "b"]}
        result = redact_dict(data)
        assert data["password"] == "1234"
        assert result["hosts"] == ["a", "b"]

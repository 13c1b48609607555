from utils.logger import sanitize_log_data

def test_password_redaction():
    data = {"email": "shopper@example.com", "password": "supersecret123"}
    sanitized = sanitize_log_data(data)

    assert sanitized["email"] == "shopper@example.com"
    assert sanitized["password"] == "***REDACTED***"


def test_hashed_password_redaction():
    sanitized = sanitize_log_data({"hashed_password": "$2b$12$abcdefghijklmnop"})

    assert sanitized["hashed_password"] == "***REDACTED***"


def test_token_partial_redaction():
    data = {"access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.long_token_here"}
    sanitized = sanitize_log_data(data)

    assert sanitized["access_token"] == data["access_token"][:8] + "..."
    assert "long_token_here" not in sanitized["access_token"]


def test_nested_dict_sanitization():
    data = {"login": {"email": "shopper@example.com", "password": "secret123"}}
    sanitized = sanitize_log_data(data)

    assert sanitized["login"]["email"] == data["login"]["email"]
    assert sanitized["login"]["password"] == "***REDACTED***"


def test_non_sensitive_data_unchanged():
    data = {"user_id": "user_1", "product_id": "p1", "quantity": 2}

    assert sanitize_log_data(data) == data

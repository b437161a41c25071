import os
import secrets
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from internal.logging import get_logger

basic_security = HTTPBasic()

USERNAME_ENV = "TOKENS_ISSUER_USERNAME"
PASSWORD_ENV = "TOKENS_ISSUER_PASSWORD"

# Guards token issuance only, parsing routes stay public
_credentials = None


def load_issuer_credentials(environ=None):
    """Issuer (username, password) from the environment, both are required."""
    environ = os.environ if environ is None else environ
    username = environ.get(USERNAME_ENV)
    password = environ.get(PASSWORD_ENV)
    if not username or not password:
        raise RuntimeError(f"{USERNAME_ENV} and {PASSWORD_ENV} must be set to issue tokens")
    return username, password


def init(credentials):
    global _credentials
    _credentials = credentials


def verify_basic_auth(credentials: HTTPBasicCredentials = Depends(basic_security)):
    if _credentials is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Issuer not configured")
    username, password = _credentials
    correct_username = secrets.compare_digest(credentials.username.encode(), username.encode())
    correct_password = secrets.compare_digest(credentials.password.encode(), password.encode())
    if not (correct_username and correct_password):
        get_logger(component="auth").warn("Issuer authentication failed", username=credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username

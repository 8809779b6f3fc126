import warnings
from datetime import timedelta

import jwt
import pytest
from pydantic import ValidationError
from roomescape.config import Settings
from roomescape.models import Role
from roomescape.utils.auth import AuthContext, create_access_token, decode_access_token

SECRET = "roomescape-test-secret-0123456789abcdef"


def test_token_round_trip_keeps_member_and_role() -> None:
    token = create_access_token(member_id=5, role=Role.ADMIN, secret=SECRET)
    auth = decode_access_token(token, secret=SECRET, algorithms=["HS256"])
    assert auth == AuthContext(member_id=5, role=Role.ADMIN)
    assert auth.is_admin


def test_expired_token_is_rejected() -> None:
    token = create_access_token(member_id=5, role=Role.USER, secret=SECRET, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        decode_access_token(token, secret=SECRET, algorithms=["HS256"])


@pytest.mark.parametrize(
    "payload",
    [
        {"role": "USER"},
        {"sub": "abc", "role": "USER"},
        {"sub": "1", "role": "OWNER"},
        {"sub": "1"},
    ],
)
def test_malformed_claims_are_rejected(payload: dict[str, str]) -> None:
    token = jwt.encode(payload, SECRET, algorithm="HS256")
    with pytest.raises(ValueError):
        decode_access_token(token, secret=SECRET, algorithms=["HS256"])


def test_default_secret_is_long_enough_for_hs256() -> None:
    secret = Settings().auth_secret
    assert len(secret.encode("utf-8")) >= 32
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        token = create_access_token(member_id=1, role=Role.USER, secret=secret)
        assert decode_access_token(token, secret=secret, algorithms=["HS256"]).member_id == 1
    assert not [w for w in caught if "key" in str(w.message).lower()]


def test_short_secret_is_rejected_by_settings() -> None:
    with pytest.raises(ValidationError):
        Settings(auth_secret="change-me")

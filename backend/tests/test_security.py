# backend/tests/test_security.py

import datetime as dt

import pytest
from jose import jwt

from app.core.errors import Forbidden, Unauthenticated
from app.core.security import Action, AuthGate

SECRET = "unit-test-secret"


@pytest.fixture
def gate():
    return AuthGate(SECRET, "HS256")


def test_verify_extracts_subject_and_admin_flag(gate):
    token = gate.create_access_token("foo", admin=True, extra={"uid": 0})
    caller = gate.verify(token)
    assert caller.subject == "foo"
    assert caller.is_admin is True
    # les autres claims restent informatives
    assert caller.claims["uid"] == 0


def test_verify_non_admin_by_default(gate):
    caller = gate.verify(gate.create_access_token("foo"))
    assert caller.is_admin is False


def test_admin_claim_must_be_boolean_true(gate):
    token = jwt.encode({"sub": "foo", "admin": "true"}, SECRET, algorithm="HS256")
    assert gate.verify(token).is_admin is False


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.abc.def"])
def test_verify_rejects_missing_or_malformed(gate, token):
    with pytest.raises(Unauthenticated):
        gate.verify(token)


def test_verify_rejects_wrong_signature(gate):
    token = AuthGate("another-secret").create_access_token("foo", admin=True)
    with pytest.raises(Unauthenticated):
        gate.verify(token)


def test_verify_rejects_expired(gate):
    token = gate.create_access_token("foo", admin=True, expires_delta=dt.timedelta(minutes=-5))
    with pytest.raises(Unauthenticated):
        gate.verify(token)


def test_verify_rejects_missing_subject(gate):
    token = jwt.encode({"admin": True}, SECRET, algorithm="HS256")
    with pytest.raises(Unauthenticated):
        gate.verify(token)


def test_token_without_expiry_is_accepted(gate):
    token = jwt.encode({"sub": "worker-1"}, SECRET, algorithm="HS256")
    assert gate.verify(token).subject == "worker-1"


@pytest.mark.parametrize("action", [Action.LIST, Action.GET])
def test_reads_allowed_without_privilege(gate, action):
    token = gate.create_access_token("foo", admin=False)
    assert gate.check(token, action).subject == "foo"


@pytest.mark.parametrize("action", [Action.CREATE, Action.UPDATE, Action.DELETE])
def test_writes_require_privilege(gate, action):
    with pytest.raises(Forbidden):
        gate.check(gate.create_access_token("foo", admin=False), action)
    assert gate.check(gate.create_access_token("foo", admin=True), action).is_admin


def test_invalid_token_fails_before_authorization(gate):
    with pytest.raises(Unauthenticated):
        gate.check("garbage", Action.LIST)

import pytest

import auth
import db


@pytest.fixture
def state():
    return db.init_state(auth.hash_password("admin123", rounds=4))


def test_hash_and_verify():
    h = auth.hash_password("secret1", rounds=4)
    assert h.startswith("$2")
    assert auth.verify_password("secret1", h)
    assert not auth.verify_password("secret2", h)


def test_long_passwords_are_truncated_to_72_bytes():
    base = "x" * 72
    h = auth.hash_password(base + "tail", rounds=4)
    assert auth.verify_password(base + "other", h)


def test_login(state):
    assert auth.login(state, "admin", "admin123")
    assert not auth.login(state, "admin", "wrong")
    assert not auth.login(state, "nobody", "admin123")


def test_change_password(state):
    auth.change_password(state, "admin", "newpass1")
    assert auth.login(state, "admin", "newpass1")
    assert not auth.login(state, "admin", "admin123")


def test_change_password_unknown_user(state):
    with pytest.raises(KeyError):
        auth.change_password(state, "nobody", "newpass1")


def test_multibyte_password_is_cut_at_72_bytes():
    base = "é" * 36
    h = auth.hash_password(base + "x", rounds=4)
    assert auth.verify_password(base + "y", h)
    assert not auth.verify_password("é" * 35, h)

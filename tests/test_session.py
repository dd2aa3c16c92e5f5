from __future__ import annotations

import pytest

from console_terminal.errors import (
    DuplicateUserError,
    InternalConsistencyError,
    NoActiveSessionError,
    UnknownUserError,
    ValidationError,
)
from console_terminal.session import ADMIN_USER, SessionManager


def _online_flags(session: SessionManager) -> set[str]:
    return {user.name for user in session.list_users() if user.is_online}


def test_admin_is_seeded_online_but_not_active() -> None:
    session = SessionManager()

    admin = session.get(ADMIN_USER)
    assert admin is not None
    assert admin.is_admin is True
    assert admin.is_online is True
    assert session.online_users() == ["admin"]
    assert session.whoami() is None


@pytest.mark.parametrize("name", ["neo", "abc", "user_123", "a" * 15, "007"])
def test_register_then_login_makes_user_active(name: str) -> None:
    session = SessionManager()

    session.register(name)
    user = session.login(name)

    assert session.whoami() is user
    assert user.is_online is True
    assert name in session.state.online
    assert session.state.online == _online_flags(session)


def test_register_lowercases_names() -> None:
    session = SessionManager()

    user = session.register("NeoX")

    assert user.name == "neox"
    assert user.is_online is False
    assert user.is_admin is False
    assert session.login("NEOX").name == "neox"


@pytest.mark.parametrize("name", ["", "ab", "a" * 16, "bad-name", "with space", "имя"])
def test_register_rejects_malformed_names(name: str) -> None:
    with pytest.raises(ValidationError):
        SessionManager().register(name)


def test_register_rejects_duplicates() -> None:
    session = SessionManager()
    session.register("neo")

    with pytest.raises(DuplicateUserError):
        session.register("neo")
    with pytest.raises(DuplicateUserError):
        session.register("ADMIN")


def test_login_unknown_user_suggests_registration() -> None:
    with pytest.raises(UnknownUserError) as excinfo:
        SessionManager().login("ghost")

    assert "register ghost" in (excinfo.value.hint or "")


def test_login_as_second_user_evicts_the_first() -> None:
    session = SessionManager()
    session.register("alice")
    session.register("bob")
    alice = session.login("alice")

    bob = session.login("bob")

    assert alice.is_online is False
    assert "alice" not in session.state.online
    assert bob.is_online is True
    assert "bob" in session.state.online
    assert session.whoami() is bob
    assert session.state.online == _online_flags(session)


def test_evicting_admin_takes_it_offline() -> None:
    session = SessionManager()
    session.register("neo")
    session.login("admin")

    session.login("neo")

    assert session.online_users() == ["neo"]


def test_relogin_as_active_user_keeps_session() -> None:
    session = SessionManager()
    session.register("neo")
    session.login("neo")

    session.login("neo")

    assert session.whoami().name == "neo"
    assert "neo" in session.state.online


def test_logout() -> None:
    session = SessionManager()
    session.register("neo")
    session.login("neo")

    user = session.logout()

    assert user.name == "neo"
    assert user.is_online is False
    assert session.whoami() is None
    assert session.online_users() == ["admin"]


def test_logout_without_session() -> None:
    with pytest.raises(NoActiveSessionError):
        SessionManager().logout()


def test_broken_invariant_fails_fast() -> None:
    session = SessionManager()
    session.state.active_user = "ghost"

    with pytest.raises(InternalConsistencyError):
        session.whoami()


def test_list_users_in_registration_order() -> None:
    session = SessionManager()
    session.register("zed")
    session.register("amy")

    assert [user.name for user in session.list_users()] == ["admin", "zed", "amy"]

"""Service-level tests for auth and todos."""

import pytest
from sqlalchemy.exc import OperationalError

from src.config import Settings
from src.exceptions import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from src.models.enums import TodoStatus
from src.models.user import User
from src.services.auth import AuthService, decode_access_token
from src.services.todo_service import TodoService, parse_positive_int

TEST_SETTINGS = Settings(jwt_secret="unit-test-secret", environment="test")


@pytest.fixture
def auth_service(db):
    return AuthService(db, TEST_SETTINGS)


@pytest.fixture
def todo_service(db):
    return TodoService(db, TEST_SETTINGS)


@pytest.fixture
def user(auth_service):
    _, user = auth_service.register("owner@example.com", "secret123", "Owner")
    return user


def test_register_hashes_password(auth_service):
    token, user = auth_service.register("Alice@Example.com", "secret123")
    assert user.email == "alice@example.com"
    assert user.password_hash != "secret123"
    assert auth_service.verify_token(token) == user.id


def test_register_duplicate(auth_service, user):
    with pytest.raises(ConflictError):
        auth_service.register("OWNER@example.com", "secret123")


@pytest.mark.parametrize(
    ("email", "password"),
    [
        (None, "secret123"),
        ("", "secret123"),
        ("no-at-sign", "secret123"),
        ("bob@example.com", None),
        ("bob@example.com", "short1"),
        ("bob@example.com", "nodigitshere"),
    ],
)
def test_register_validation(auth_service, email, password):
    with pytest.raises(ValidationError):
        auth_service.register(email, password)


def test_login(auth_service, user):
    token, logged_in = auth_service.login("owner@example.com", "secret123")
    assert logged_in.id == user.id
    payload = decode_access_token(token, TEST_SETTINGS)
    assert payload["sub"] == str(user.id)
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


@pytest.mark.parametrize(
    ("email", "password"),
    [("owner@example.com", "wrong1234"), ("ghost@example.com", "secret123"), ("", "")],
)
def test_login_failures_are_generic(auth_service, user, email, password):
    with pytest.raises(AuthError, match="Invalid credentials"):
        auth_service.login(email, password)


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_verify_token_rejects_bad_tokens(auth_service, token):
    with pytest.raises(AuthError):
        auth_service.verify_token(token)


def test_verify_token_rejects_other_secret(auth_service, user):
    other = AuthService(auth_service.db, Settings(jwt_secret="another-secret"))
    token, _ = other.login("owner@example.com", "secret123")
    with pytest.raises(AuthError):
        auth_service.verify_token(token)


def test_get_profile_missing(auth_service):
    with pytest.raises(NotFoundError):
        auth_service.get_profile(12345)


def test_create_defaults(todo_service, user):
    todo = todo_service.create_todo(user.id, "  Buy milk  ")
    assert todo.id is not None
    assert todo.title == "Buy milk"
    assert todo.status == TodoStatus.PENDING.value
    assert todo.created_at is not None


@pytest.mark.parametrize("title", [None, "", "   "])
def test_create_requires_title(todo_service, user, title):
    with pytest.raises(ValidationError):
        todo_service.create_todo(user.id, title)


def test_update_partial(todo_service, user):
    todo = todo_service.create_todo(user.id, "Laundry", description="Whites")
    updated = todo_service.update_todo(user.id, todo.id, {"status": "completed"})
    assert updated.status == "completed"
    assert updated.title == "Laundry"
    assert updated.description == "Whites"


def test_update_null_title_keeps_value(todo_service, user):
    todo = todo_service.create_todo(user.id, "Laundry")
    updated = todo_service.update_todo(user.id, todo.id, {"title": None, "status": None})
    assert updated.title == "Laundry"
    assert updated.status == "pending"


def test_ownership_scoping(todo_service, auth_service, user):
    _, intruder = auth_service.register("intruder@example.com", "secret123")
    todo = todo_service.create_todo(user.id, "Private")

    with pytest.raises(NotFoundError):
        todo_service.get_todo(intruder.id, todo.id)
    with pytest.raises(NotFoundError):
        todo_service.update_todo(intruder.id, todo.id, {"title": "Mine now"})
    with pytest.raises(NotFoundError):
        todo_service.delete_todo(intruder.id, todo.id)
    assert todo_service.list_todos(intruder.id).total == 0
    assert todo_service.get_todo(user.id, todo.id).title == "Private"


def test_list_pagination(todo_service, user):
    for i in range(25):
        todo_service.create_todo(user.id, f"Todo {i}")

    pages = [todo_service.list_todos(user.id, page, 10) for page in (1, 2, 3, 4)]
    assert [len(p.items) for p in pages] == [10, 10, 5, 0]
    assert all(p.total == 25 and p.total_pages == 3 for p in pages)
    assert pages[1].items[0].title == "Todo 10"


def test_list_limit_is_capped(todo_service, user):
    todo_service.create_todo(user.id, "One")
    result = todo_service.list_todos(user.id, 1, 10_000)
    assert result.limit == TEST_SETTINGS.max_page_size


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, 7), ("3", 3), (" 4 ", 4), ("abc", 7), ("0", 7), ("-2", 7), ("1.5", 7), (5, 5)],
)
def test_parse_positive_int(value, expected):
    assert parse_positive_int(value, 7) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("pending", TodoStatus.PENDING),
        ("In-Progress", TodoStatus.IN_PROGRESS),
        ("completed", TodoStatus.COMPLETED),
        ("done", None),
        (None, None),
    ],
)
def test_status_parse(value, expected):
    assert TodoStatus.parse(value) is expected


def test_register_rejects_password_past_bcrypt_limit(auth_service):
    with pytest.raises(ValidationError, match="at most 72 bytes"):
        auth_service.register("long@example.com", "a" * 72 + "1")


def test_register_accepts_password_at_bcrypt_limit(auth_service):
    password = "a" * 71 + "1"
    auth_service.register("edge@example.com", password)
    token, _ = auth_service.login("edge@example.com", password)
    assert token


def test_login_rejects_password_sharing_first_72_bytes(auth_service):
    password = "a" * 71 + "1"
    auth_service.register("edge@example.com", password)
    with pytest.raises(AuthError):
        auth_service.login("edge@example.com", password + "different9")


def test_register_race_on_unique_email(auth_service, user, monkeypatch):
    # Pre-check misses the existing row, so the insert hits the unique index
    monkeypatch.setattr(auth_service, "get_user_by_email", lambda email: None)

    with pytest.raises(ConflictError, match="User already exists"):
        auth_service.register("owner@example.com", "secret123")

    assert auth_service.db.query(User).count() == 1


def test_commit_failure_becomes_internal_error(todo_service, user, monkeypatch):
    def failing_commit():
        raise OperationalError("INSERT INTO todos", {}, Exception("disk I/O error"))

    monkeypatch.setattr(todo_service.db, "commit", failing_commit)

    with pytest.raises(InternalError) as excinfo:
        todo_service.create_todo(user.id, "Doomed")
    assert "disk I/O error" in excinfo.value.details


def test_list_page_far_past_end(todo_service, user):
    todo_service.create_todo(user.id, "Only")
    result = todo_service.list_todos(user.id, "99999999999999999999", 10)
    assert result.items == []
    assert result.total == 1
    assert result.page == 99999999999999999999
    assert result.total_pages == 1


@pytest.mark.parametrize("todo_id", [0, -1, 2**63, 99999999999999999999])
def test_get_out_of_range_id(todo_service, user, todo_id):
    with pytest.raises(NotFoundError):
        todo_service.get_todo(user.id, todo_id)

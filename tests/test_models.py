import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from scalable_api.models import Base, Role, User


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


def test_role_to_dict(session):
    role = Role(role="admin")
    session.add(role)
    session.commit()
    data = role.to_dict()
    assert data == {"id": role.id, "role": "admin"}
    assert data["id"] >= 1


def test_user_to_dict_hides_password_and_nests_role(session):
    password = "password"
    user = User(
        name="Alice",
        email="alice@example.com",
        password=password,
        status=1,
        role=Role(role="admin"),
    )
    session.add(user)
    session.commit()
    data = user.to_dict()
    assert "password" not in data
    assert data["name"] == "Alice"
    assert data["email"] == "alice@example.com"
    assert data["status"] == 1
    assert data["role_id"] == user.role.id
    assert data["role"] == user.role.to_dict()


def test_serialised_forms_omit_timestamps(session):
    user = User(name="Bob", email="bob@example.com", role=Role(role="user"))
    session.add(user)
    session.commit()
    assert user.created_at is not None
    assert user.deleted_at is None
    data = user.to_dict()
    for column in ("created_at", "updated_at", "deleted_at"):
        assert column not in data
        assert column not in data["role"]


def test_defaults_applied_on_insert(session):
    role = Role(role="user")
    session.add(role)
    session.flush()
    user = User(role_id=role.id)
    session.add(user)
    session.commit()
    session.refresh(user)
    assert user.name == ""
    assert user.email == ""
    assert user.status == 0
    assert user.password == ""


def test_unsaved_user_serialises_zero_values():
    assert User().to_dict() == {
        "id": 0,
        "name": "",
        "email": "",
        "status": 0,
        "role_id": 0,
        "role": {"id": 0, "role": ""},
    }
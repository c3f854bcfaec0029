import pytest

from apisample.database import DatabaseInstance, migrate, new_database
from apisample.entities import Category, User, new_domains, new_user
from apisample.repository import (
    CategoryRepository,
    DuplicateEmailError,
    RecordNotFoundError,
    UserRepository,
)

PASSWORD = "password"


@pytest.fixture
def engine():
    db = new_database(DatabaseInstance.SQLITE, environ={})
    migrate(db, *new_domains())
    yield db
    db.dispose()


@pytest.fixture
def users(engine):
    return UserRepository(engine)


def _user(user_id, email, category="work", name="Alice"):
    user = new_user(name, email, PASSWORD)
    user.id = user_id
    user.category = Category(name=category)
    return user


def test_category_get_or_create_reuses_existing(engine):
    repo = CategoryRepository(engine)
    first = repo.get_or_create(Category(name="work"))
    second = repo.get_or_create(Category(name="work"))
    assert first.id == second.id
    assert first.name == "work"


def test_category_distinct_names_get_distinct_ids(engine):
    repo = CategoryRepository(engine)
    work = repo.get_or_create(Category(name="work"))
    study = repo.get_or_create(Category(name="study"))
    assert work.id != study.id
    assert study.name == "study"


def test_get_or_create_category_attaches_category(users):
    user = _user("u1", "alice@example.com", "study")
    category = users.get_or_create_category(user)
    assert user.category_id == category.id
    assert user.category.name == "study"


def test_create_and_find_by_id(users):
    created = users.create(_user("u1", "alice@example.com", "study"))
    assert created.category_id == created.category.id
    found = users.find_by_id("u1")
    assert found.email == "alice@example.com"
    assert found.category.name == "study"


def test_find_by_email(users):
    users.create(_user("u1", "alice@example.com"))
    found = users.find_by_email("alice@example.com")
    assert found.id == "u1"
    assert found.category.name == "work"


def test_create_duplicate_email_raises(users):
    users.create(_user("u1", "alice@example.com"))
    with pytest.raises(DuplicateEmailError):
        users.create(_user("u2", "alice@example.com"))


def test_users_share_category(users):
    a = users.create(_user("u1", "alice@example.com", "private"))
    b = users.create(_user("u2", "bob@example.com", "private", name="Bob"))
    assert a.category_id == b.category_id


def test_find_missing_raises(users):
    with pytest.raises(RecordNotFoundError):
        users.find_by_id("missing")
    with pytest.raises(RecordNotFoundError):
        users.find_by_email("nobody@example.com")


def test_find_all(users):
    assert users.find_all() == []
    users.create(_user("u1", "alice@example.com"))
    users.create(_user("u2", "bob@example.com", name="Bob"))
    assert sorted(u.id for u in users.find_all()) == ["u1", "u2"]


def test_save_updates_non_empty_fields(users):
    users.create(_user("u1", "alice@example.com", "work"))
    update = User(id="u1", name="Alicia", email="", password="", category=Category(name="private"))
    saved = users.save(update)
    assert saved.name == "Alicia"
    assert saved.email == "alice@example.com"
    assert saved.category.name == "private"
    found = users.find_by_id("u1")
    assert found.name == "Alicia"
    assert found.password == PASSWORD
    assert found.category.name == "private"


def test_save_sets_optional_profile_text(users):
    users.create(_user("u1", "alice@example.com"))
    update = User(id="u1", name="", email="", password="", category=Category(name="work"))
    update.profile_text = "hello"
    users.save(update)
    assert users.find_by_id("u1").profile_text == "hello"


def test_save_missing_raises(users):
    with pytest.raises(RecordNotFoundError):
        users.save(_user("missing", "ghost@example.com"))


def test_delete(users):
    users.create(_user("u1", "alice@example.com"))
    users.delete("u1")
    with pytest.raises(RecordNotFoundError):
        users.find_by_id("u1")
    assert users.find_all() == []


def test_delete_missing_raises(users):
    with pytest.raises(RecordNotFoundError):
        users.delete("missing")
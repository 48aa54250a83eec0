"""shared fixtures: an in-memory seeded database and scripted terminal input"""
import pytest

from pizzastore.accounts import AccountManager, Session
from pizzastore.catalog import CatalogBrowser
from pizzastore.config import DEFAULT_MANAGER_LOGIN, MEMORY_DB
from pizzastore.database import DatabaseManager
from pizzastore.menu_admin import MenuAdmin
from pizzastore.models import Role
from pizzastore.orders import OrderManager
from pizzastore.profiles import ProfileManager


@pytest.fixture
def db():
    database = DatabaseManager(MEMORY_DB)
    yield database
    database.close()


@pytest.fixture
def accounts(db):
    return AccountManager(db)


@pytest.fixture
def catalog(db):
    return CatalogBrowser(db)


@pytest.fixture
def orders(db, accounts, catalog):
    return OrderManager(db, accounts, catalog)


@pytest.fixture
def profiles(db, accounts):
    return ProfileManager(db, accounts)


@pytest.fixture
def menu_admin(db, accounts, catalog):
    return MenuAdmin(db, accounts, catalog)


@pytest.fixture
def customer(accounts):
    accounts.register("alice", "secret", "555-0100")
    return Session("alice")


@pytest.fixture
def driver(db, accounts):
    accounts.register("dave", "wheels", "555-0101")
    db.execute("UPDATE Users SET role=? WHERE login=?;", (Role.DRIVER.value, "dave"))
    return Session("dave")


@pytest.fixture
def manager():
    return Session(DEFAULT_MANAGER_LOGIN)


@pytest.fixture
def answers(monkeypatch):
    """script the answers input() will return; running out behaves like ctrl+d"""
    def feed(*values):
        it = iter(values)

        def fake_input(prompt=""):
            try:
                return next(it)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
    return feed


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """termcolor honours NO_COLOR; keeps captured output free of escape codes"""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")

import pytest

from pizzastore.accounts import Session
from pizzastore.errors import AuthorizationError, NotFoundError, StatementError, ValidationError
from pizzastore.models import Cart
from pizzastore.profiles import ProfileField


def test_view_profile(profiles, customer):
    profile = profiles.view_profile(customer.login)
    assert profile.login == "alice"
    assert profile.password == "secret"
    assert profile.role == "customer"
    assert profile.favorite_item is None
    assert profile.phone == "555-0100"


def test_view_missing_profile(profiles):
    with pytest.raises(NotFoundError):
        profiles.view_profile("ghost")


def test_show_profile(profiles, customer, capsys):
    profiles.show_profile(customer)
    out = capsys.readouterr().out
    assert "alice" in out and "555-0100" in out


@pytest.mark.parametrize("field,value", [
    (ProfileField.FAVORITE_ITEM, "Hawaiian"),
    (ProfileField.PHONE, "555-9999"),
    (ProfileField.PASSWORD, "new-secret"),
])
def test_edit_own_field(db, profiles, customer, field, value):
    profiles.edit_own_field(customer, field, value)
    assert db.query_rows(f"SELECT {field.value} FROM Users WHERE login='alice';") == [[value]]


def test_cannot_edit_own_role(profiles, customer):
    with pytest.raises(ValidationError):
        profiles.edit_own_field(customer, ProfileField.ROLE, "manager")


def test_empty_value_is_rejected(profiles, customer):
    with pytest.raises(ValidationError):
        profiles.edit_own_field(customer, ProfileField.PHONE, "")


def test_update_profile_menu(db, profiles, customer, answers):
    answers("2", "", "555-4242")
    profiles.update_profile(customer)
    assert profiles.view_profile("alice").phone == "555-4242"


def test_customer_cannot_edit_others(db, profiles, customer, manager):
    with pytest.raises(AuthorizationError):
        profiles.edit_user_field(customer, manager.login, ProfileField.ROLE, "customer")
    assert profiles.view_profile(manager.login).role == "manager"


def test_customer_denied_user_menu(profiles, customer, answers):
    answers()
    with pytest.raises(AuthorizationError):
        profiles.update_user(customer)


def test_manager_changes_role(profiles, manager, customer):
    assert profiles.edit_user_field(manager, "alice", ProfileField.ROLE, "driver") == manager.login
    assert profiles.view_profile("alice").role == "driver"


def test_manager_unknown_role(profiles, manager, customer):
    with pytest.raises(ValidationError):
        profiles.edit_user_field(manager, "alice", ProfileField.ROLE, "overlord")


def test_manager_unknown_target(profiles, manager):
    with pytest.raises(NotFoundError):
        profiles.edit_user_field(manager, "ghost", ProfileField.PHONE, "1")


def test_self_rename_moves_session(profiles, manager):
    new_login = profiles.edit_user_field(manager, "manager", ProfileField.LOGIN, "boss")
    assert new_login == "boss"
    assert profiles.view_profile("boss").role == "manager"


def test_renaming_someone_else_keeps_session(profiles, manager, customer):
    assert profiles.edit_user_field(manager, "alice", ProfileField.LOGIN, "alicia") == "manager"
    assert profiles.view_profile("alicia").phone == "555-0100"


def test_rename_to_taken_login_fails(profiles, manager, customer):
    with pytest.raises(StatementError):
        profiles.edit_user_field(manager, "alice", ProfileField.LOGIN, "manager")


def test_rename_carries_orders(db, orders, profiles, manager, customer):
    cart = Cart()
    cart.add("Cola", 1)
    orders.place_order(customer, 1, cart)
    profiles.edit_user_field(manager, "alice", ProfileField.LOGIN, "alicia")
    assert len(orders.order_history(Session("alicia"))) == 1


def test_update_user_menu_self_rename(profiles, manager, answers):
    answers("ghost", "manager", "4", "boss")
    profiles.update_user(manager)
    assert manager.login == "boss"


def test_update_user_menu_other(profiles, manager, customer, answers):
    answers("alice", "5", "admin", "driver")
    profiles.update_user(manager)
    assert manager.login == "manager"
    assert profiles.view_profile("alice").role == "driver"


def test_update_user_menu_quit(profiles, manager, answers):
    answers("q")
    profiles.update_user(manager)
    assert manager.login == "manager"

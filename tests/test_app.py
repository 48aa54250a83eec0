import dataclasses

import pytest

from pizzastore.app import main
from pizzastore.config import ConnectionSettings
from pizzastore.errors import ValidationError

ARGS = [":memory:", "5432", "tester"]


@pytest.mark.parametrize("args", [[], ["pizza"], ["pizza", "5432"], ["pizza", "5432", "me", "extra"]])
def test_wrong_arg_count(args, capsys):
    assert main(args) == 1
    assert "usage" in capsys.readouterr().err


def test_non_numeric_port(capsys):
    assert main(["pizza", "port", "me"]) == 1
    assert "port" in capsys.readouterr().err


def test_unreachable_database(tmp_path, capsys):
    assert main([str(tmp_path / "missing" / "pizza"), "5432", "me"]) == 1
    assert "unable to connect" in capsys.readouterr().err


def test_settings():
    settings = ConnectionSettings.from_args(["pizza", "5432", "me"])
    assert settings.path == "pizza.db"
    assert settings.port == 5432
    assert "me" in settings.url
    assert ConnectionSettings.from_args(["pizza.db", "1", "me"]).path == "pizza.db"
    assert ConnectionSettings.from_args(ARGS).path == ":memory:"
    with pytest.raises(ValidationError):
        ConnectionSettings.from_args(["pizza"])


def test_settings_fields():
    assert {f.name for f in dataclasses.fields(ConnectionSettings)} == {"dbname", "port", "user"}


def test_exit_immediately(answers, capsys):
    answers("9")
    assert main(ARGS) == 0
    assert "bye" in capsys.readouterr().out


def test_end_of_input_exits_cleanly(answers):
    answers()
    assert main(ARGS) == 0


def test_full_customer_session(answers, capsys):
    answers(
        "1", "bob", "pw", "555-0102",           # create user
        "2", "bob", "nope",                     # failed login
        "2", "bob", "pw",                       # log in
        "4", "1", "Margherita", "2", "y", "Cola", "3", "n",  # place order
        "6",                                    # recent orders
        "10",                                   # update menu: denied
        "11",                                   # update user: denied
        "20",                                   # log out
        "9",
    )
    assert main(ARGS) == 0
    out = capsys.readouterr().out
    assert "account created" in out
    assert "username/password is wrong" in out
    assert "order id: 1" in out and "22.50" in out
    assert "order #1" in out
    assert "you do not have permission to update the menu" in out
    assert "you do not have permission to update users" in out
    assert "logged out bob" in out


def test_duplicate_registration_keeps_running(answers, capsys):
    answers("1", "manager", "pw", "", "9")
    assert main(ARGS) == 0
    assert "UNIQUE constraint failed" in capsys.readouterr().out


def test_manager_session_self_rename(answers, capsys):
    answers(
        "2", "manager", "manager",
        "11", "manager", "4", "boss",   # rename self
        "12",                           # who am i
        "20", "9",
    )
    assert main(ARGS) == 0
    out = capsys.readouterr().out
    assert "manager: boss" in out
    assert "logged out boss" in out


def test_oversized_order_id_reprompts(answers, capsys):
    answers(
        "2", "manager", "manager",
        "7", "99999999999999999999", "404",  # order info
        "20", "9",
    )
    assert main(ARGS) == 0
    out = capsys.readouterr().out
    assert "your input is invalid!" in out
    assert "no order found with the given id" in out


def test_oversized_store_and_quantity_reprompt(answers, capsys):
    answers(
        "2", "manager", "manager",
        "4", "99999999999999999999", "1",               # store id
        "Cola", "99999999999999999999", "1", "n",        # quantity
        "20", "9",
    )
    assert main(ARGS) == 0
    out = capsys.readouterr().out
    assert out.count("your input is invalid!") == 2
    assert "order id: 1" in out

"""accounts/auth: registration, login and role checks"""
import logging
from dataclasses import dataclass
from typing import Iterable

from termcolor import cprint, colored

from .database import DatabaseManager
from .errors import AuthorizationError
from .helpers import FieldKind, prompt_value
from .models import Role

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """who is logged in; passed explicitly to every menu action"""
    login: str | None = None

    @property
    def active(self) -> bool:
        return self.login is not None


class AccountManager:
    """manage user accounts (plain text passwords, compared for equality)"""
    def __init__(self, db: DatabaseManager):
        self.db = db

    def _login(self, username: str, password: str) -> bool:
        """internal credential check"""
        count = self.db.query_count(
            "SELECT login FROM Users WHERE login=? AND password=?",
            (username, password)
        )
        return count > 0

    def login(self, username: str | None = None, password: str | None = None) -> str | None:
        """check credentials (prompting if not given); return the login or none"""
        if username is None:
            username = input(colored("enter username: ", "magenta")).strip()
        if password is None:
            password = input(colored("enter password: ", "magenta")).strip()
        if not self._login(username, password):
            cprint("username/password is wrong, try again.", "red")
            return None
        logger.info("login %s", username)
        cprint(f"logged in as {colored(username, 'yellow', attrs=['bold'])}", "green")
        return username

    def register(self, username: str | None = None, password: str | None = None, phone: str | None = None):
        """create a customer account; duplicate logins raise StatementError"""
        if username is None:
            username = prompt_value("username", FieldKind.NOT_NULL)
        if password is None:
            password = prompt_value("password", FieldKind.NOT_NULL)
        if phone is None:
            phone = prompt_value("phone number")
        self.db.execute(
            "INSERT INTO Users(login, password, role, phoneNum) VALUES(?, ?, ?, ?);",
            (username, password, Role.CUSTOMER.value, phone)
        )
        logger.info("registered %s", username)
        cprint("account created", "green")

    def user_exists(self, login: str) -> bool:
        """check if login exists"""
        return self.db.query_count("SELECT 1 FROM Users WHERE login=?", (login,)) > 0

    def authorize(self, login: str | None, allowed_roles: Iterable[Role]) -> bool:
        """true iff the user's stored role is one of allowed_roles"""
        if login is None:
            return False
        for role in allowed_roles:
            if self.db.query_count(
                "SELECT 1 FROM Users WHERE login=? AND role=?",
                (login, role.value)
            ) > 0:
                return True
        return False

    def require_role(self, session: Session, allowed_roles: Iterable[Role], action: str = "do this"):
        """guard for privileged actions"""
        if not self.authorize(session.login, allowed_roles):
            logger.info("denied %s for %s", action, session.login)
            raise AuthorizationError(f"you do not have permission to {action}")

    def role_of(self, login: str | None) -> Role | None:
        """stored role of login, none if unknown"""
        rows = self.db.query_rows("SELECT role FROM Users WHERE login=?;", (login,))
        if not rows:
            return None
        try:
            return Role(rows[0][0])
        except ValueError:
            return None

    def logout(self, session: Session):
        """log out current user"""
        if not session.active:
            cprint("no user logged in", "red")
            return
        cprint(f"logged out {session.login}", "green")
        session.login = None

    def whoami(self, session: Session):
        """print current user identity"""
        if not session.active:
            cprint("no user currently logged in", "red"); return
        role = self.role_of(session.login)
        prefix = f"{role.value}: " if role and role is not Role.CUSTOMER else ""
        cprint(f"you are logged in as {prefix}{colored(session.login, 'yellow', attrs=['bold'])}", "green")

"""profile viewing/editing and manager-side user administration"""
import logging
from enum import Enum

from termcolor import cprint

from .accounts import AccountManager, Session
from .database import DatabaseManager
from .errors import NotFoundError, ValidationError
from .helpers import FieldKind, print_fields, print_options, prompt_value, read_choice, validate
from .models import Profile, Role

logger = logging.getLogger(__name__)


class ProfileField(Enum):
    """editable user column"""
    LOGIN = "login"
    ROLE = "role"
    FAVORITE_ITEM = "favoriteItems"
    PHONE = "phoneNum"
    PASSWORD = "password"

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


OWN_FIELDS = (ProfileField.FAVORITE_ITEM, ProfileField.PHONE, ProfileField.PASSWORD)
QUIT = "q"


class ProfileManager:
    """users looking at themselves, managers editing anyone"""
    def __init__(self, db: DatabaseManager, account_manager: AccountManager):
        self.db = db
        self.account_manager = account_manager

    def view_profile(self, login: str | None) -> Profile:
        rows = self.db.query_rows(
            "SELECT login, password, role, favoriteItems, phoneNum FROM Users WHERE login=?;",
            (login,)
        )
        if not rows:
            raise NotFoundError("error! user not found!")
        return Profile.from_row(rows[0])

    def show_profile(self, session: Session):
        """print the session user's profile"""
        profile = self.view_profile(session.login)
        cprint("profile", "green", attrs=["bold"])
        print_fields([
            ("username", profile.login),
            ("password", profile.password),
            ("user role", profile.role),
            ("favorite item", profile.favorite_item),
            ("phone number", profile.phone),
        ])

    def _write(self, target: str, field: ProfileField, value: str):
        # field.value is a fixed column name, never user input
        self.db.execute(f"UPDATE Users SET {field.value}=? WHERE login=?;", (value, target))
        logger.info("user %s: %s updated", target, field.label)

    def edit_own_field(self, session: Session, field: ProfileField, value: str | None = None):
        """overwrite one of the user's own profile fields"""
        if field not in OWN_FIELDS:
            raise ValidationError(f"you cannot change your own {field.label}")
        if value is None:
            value = prompt_value(f"new {field.label}", FieldKind.NOT_NULL)
        self._write(session.login, field, validate(value, FieldKind.NOT_NULL))
        cprint(f"{field.label} updated", "green")

    def edit_user_field(self, session: Session, target: str, field: ProfileField, value: str | None = None) -> str:
        """manager edit of any user's field; returns the actor's (possibly renamed) login"""
        self.account_manager.require_role(session, (Role.MANAGER,), "update users")
        if not self.account_manager.user_exists(target):
            raise NotFoundError(f"user {target!r} not found")
        allowed = Role.values() if field is ProfileField.ROLE else None
        if value is None:
            value = prompt_value(f"new {field.label}", FieldKind.NOT_NULL, allowed)
        self._write(target, field, validate(value, FieldKind.NOT_NULL, allowed))
        cprint(f"{field.label} for {target} updated", "green")
        if field is ProfileField.LOGIN and target == session.login:
            return value
        return session.login

    def update_profile(self, session: Session):
        """profile edit menu for the session user"""
        self.show_profile(session)
        print_options("change profile menu", [
            (1, "change favorite item"),
            (2, "change phone number"),
            (3, "change password"),
            (4, "return home"),
        ])
        choice = read_choice()
        if choice == 4:
            return
        field = {1: ProfileField.FAVORITE_ITEM, 2: ProfileField.PHONE, 3: ProfileField.PASSWORD}.get(choice)
        if field is None:
            cprint("unrecognized choice!", "red"); return
        self.edit_own_field(session, field)

    def _prompt_target(self) -> str | None:
        while True:
            target = prompt_value(f"user ('{QUIT}' to quit)", FieldKind.NOT_NULL)
            if target == QUIT:
                return None
            if self.account_manager.user_exists(target):
                return target
            cprint("invalid user!", "red")

    def update_user(self, session: Session):
        """manager menu for editing another user; renames of self carry into the session"""
        self.account_manager.require_role(session, (Role.MANAGER,), "update users")
        target = self._prompt_target()
        if target is None:
            return
        print_options(f"update {target}", [
            (1, "change favorite item"),
            (2, "change phone number"),
            (3, "change password"),
            (4, "change login"),
            (5, "change role"),
            (6, "return home"),
        ])
        choice = read_choice()
        if choice == 6:
            return
        field = {
            1: ProfileField.FAVORITE_ITEM,
            2: ProfileField.PHONE,
            3: ProfileField.PASSWORD,
            4: ProfileField.LOGIN,
            5: ProfileField.ROLE,
        }.get(choice)
        if field is None:
            cprint("unrecognized choice!", "red"); return
        session.login = self.edit_user_field(session, target, field)

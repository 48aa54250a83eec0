"""application wiring and process entry point"""
import atexit
import logging
import signal
import sys

from termcolor import cprint, colored
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

from .accounts import AccountManager, Session
from .catalog import CatalogBrowser
from .commands import Command, CommandMenu
from .config import LOG_FORMAT, LOG_LEVEL, ConnectionSettings
from .database import DatabaseManager
from .errors import DatabaseConnectionError, PizzaStoreError, ValidationError
from .menu_admin import MenuAdmin
from .orders import OrderManager
from .profiles import ProfileManager

logger = logging.getLogger(__name__)


class Application:
    """bootstrap objects and build the two menu levels"""
    def __init__(self, settings: ConnectionSettings):
        print(f"connecting to database... connection url: {settings.url}")
        self.db = DatabaseManager(settings.path)
        atexit.register(self.db.close)
        cprint("done", "green")

        self.session = Session()
        self.account_manager = AccountManager(self.db)
        self.catalog = CatalogBrowser(self.db)
        self.order_manager = OrderManager(self.db, self.account_manager, self.catalog)
        self.profile_manager = ProfileManager(self.db, self.account_manager)
        self.menu_admin = MenuAdmin(self.db, self.account_manager, self.catalog)

        self.main_menu = CommandMenu("main menu", 9, "< exit")
        self.main_menu.commands += [
            Command(1, self.account_manager.register, "create user"),
            Command(2, self.login, "log in"),
        ]

        s = self.session
        self.user_menu = CommandMenu("main menu", 20, "log out",
                                     on_exit=lambda: self.account_manager.logout(s))
        self.user_menu.commands += [
            Command(1, lambda: self.profile_manager.show_profile(s), "view profile"),
            Command(2, lambda: self.profile_manager.update_profile(s), "update profile"),
            Command(3, self.catalog.browse, "view menu"),
            Command(4, lambda: self.order_manager.place_order(s), "place order"),
            Command(5, lambda: self.order_manager.view_order_history(s), "view full order id history"),
            Command(6, lambda: self.order_manager.view_recent_orders(s), "view past 5 order ids"),
            Command(7, lambda: self.order_manager.view_order_info(s), "view order information"),
            Command(8, self.catalog.view_stores, "view stores"),
            Command(9, lambda: self.order_manager.update_order_status(s), "update order status (drivers & managers)"),
            Command(10, lambda: self.menu_admin.update_menu(s), "update menu (managers)"),
            Command(11, lambda: self.profile_manager.update_user(s), "update user (managers)"),
            Command(12, lambda: self.account_manager.whoami(s), "who am i"),
        ]

    def login(self):
        """log in and stay in the user menu until logout"""
        login = self.account_manager.login()
        if login is None:
            return
        self.session.login = login
        self.user_menu.run()

    def run(self):
        cprint("""
*******************************************************
              pizza store user interface 🍕
*******************************************************
""", "green", attrs=["bold"])
        self.main_menu.run()


# signal handler
class SignalHandler:
    """ctrl+c exits without a traceback"""
    @staticmethod
    def sigint(_, __):
        cprint("\nnext time, use exit!", "yellow")
        sys.exit(0)


def configure_logging():
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.WARNING), format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> int:
    """entrypoint: pizzastore <dbname> <port> <user>"""
    args = sys.argv[1:] if argv is None else argv
    try:
        settings = ConnectionSettings.from_args(args)
    except ValidationError as e:
        print(e, file=sys.stderr)
        return 1

    # fix windows terminal misinterpreting ansi escape sequences
    enable_windows_ansi_interpretation()
    configure_logging()
    signal.signal(signal.SIGINT, SignalHandler.sigint)

    try:
        app = Application(settings)
    except DatabaseConnectionError as e:
        print(colored(f"error - {e}", "red"), file=sys.stderr)
        print("make sure the database path is writable")
        return 1
    try:
        app.run()
    except EOFError:
        print()
    except PizzaStoreError as e:
        logger.error("unexpected error: %s", e)
        print(colored(str(e), "red"), file=sys.stderr)
    finally:
        print("disconnecting from database...", end=" ")
        app.db.close()
        cprint("done\n\nbye!", "green")
    return 0

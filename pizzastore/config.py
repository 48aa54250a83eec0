import os
from dataclasses import dataclass

from .errors import ValidationError

# constants
DB_FILE_SUFFIX = ".db"
MEMORY_DB = ":memory:"
RECENT_ORDER_LIMIT = 5
PRICE_PATTERN = r"^\d+(\.\d{1,2})?$"
SQLITE_MAX_INT = 2**63 - 1

# environment overrides
LOG_LEVEL = os.getenv("PIZZASTORE_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = os.getenv("PIZZASTORE_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
DEFAULT_MANAGER_LOGIN = os.getenv("PIZZASTORE_MANAGER_LOGIN", "manager")
DEFAULT_MANAGER_PASSWORD = os.getenv("PIZZASTORE_MANAGER_PASSWORD", "manager")

USAGE = "usage: pizzastore <dbname> <port> <user>"


@dataclass(frozen=True)
class ConnectionSettings:
    """where and as whom to connect"""
    dbname: str
    port: int
    user: str

    @classmethod
    def from_args(cls, args: list[str]) -> "ConnectionSettings":
        """build settings from the three positional args; raises ValidationError"""
        if len(args) != 3:
            raise ValidationError(USAGE)
        dbname, port, user = args
        if not port.isdigit():
            raise ValidationError(f"port must be numeric, got {port!r}")
        return cls(dbname, int(port), user)

    @property
    def path(self) -> str:
        """sqlite file backing this database"""
        if self.dbname == MEMORY_DB or self.dbname.endswith(DB_FILE_SUFFIX):
            return self.dbname
        return self.dbname + DB_FILE_SUFFIX

    @property
    def url(self) -> str:
        """connection url for display"""
        return f"sqlite:///{self.path}?port={self.port}&user={self.user}"

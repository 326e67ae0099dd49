"""Global enums shared across bm_* packages."""

from enum import Enum


class QueryStatus(str, Enum):
    """Lifecycle of one cached read: IDLE -> LOADING -> SUCCESS | ERROR."""
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ProfitStatus(str, Enum):
    PROFIT = "PROFIT"
    BREAK_EVEN = "BREAK_EVEN"
    LOSS = "LOSS"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class WriteOp(str, Enum):
    """Every ledger write the client issues; keys the invalidation graph."""
    CREATE_PRODUCT = "CREATE_PRODUCT"
    UPDATE_PRODUCT = "UPDATE_PRODUCT"
    DELETE_PRODUCT = "DELETE_PRODUCT"
    CREATE_CUSTOMER = "CREATE_CUSTOMER"
    UPDATE_CUSTOMER = "UPDATE_CUSTOMER"
    DELETE_CUSTOMER = "DELETE_CUSTOMER"
    CREATE_INVOICE = "CREATE_INVOICE"
    CREATE_SALE = "CREATE_SALE"
    CREATE_EXPENSE = "CREATE_EXPENSE"
    UPDATE_EXPENSE = "UPDATE_EXPENSE"
    DELETE_EXPENSE = "DELETE_EXPENSE"
    UPDATE_SETTINGS = "UPDATE_SETTINGS"
    SAVE_PROFILE = "SAVE_PROFILE"


DEFAULT_EXPENSE_CATEGORY = "Other"
ALL_CATEGORIES = "All"

from .connection import DatabaseManager, get_database_manager, get_db_session
from .fixtures import (
    cleanup_test_data,
    create_test_call,
    create_test_data,
    create_test_user,
)

__all__ = [
    "DatabaseManager",
    "get_database_manager",
    "get_db_session",
    "create_test_user",
    "create_test_call",
    "create_test_data",
    "cleanup_test_data",
]

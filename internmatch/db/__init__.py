"""
Database module - PostgreSQL (relational data) and MongoDB (translation cache).
"""
from internmatch.db.postgres import execute_raw_sql, get_db_session, test_postgres_connection
from internmatch.db.mongodb import get_mongo_db, test_mongo_connection

__all__ = [
    "execute_raw_sql",
    "get_db_session",
    "test_postgres_connection",
    "get_mongo_db",
    "test_mongo_connection"
]

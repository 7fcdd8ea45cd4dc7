from .firestore import (
    get_db,
    init_firestore,
    check_connection,
    FirestoreRepository,
)
from .repository import JobRepository

__all__ = [
    "get_db",
    "init_firestore",
    "check_connection",
    "FirestoreRepository",
    "JobRepository",
]

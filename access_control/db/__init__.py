"""
Database Module

Database connectivity, session management and transactions.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   FastAPI Route                                                             │
│       │                                                                     │
│       │  Dependency Injection: get_db()                                     │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              AsyncSession (from session.py)                 │          │
│   │  - One session per request                                  │          │
│   │  - Rolled back on exception, closed when request ends       │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       │  Service opens one Transaction per write                            │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              Transaction (from transaction.py)              │          │
│   │  - Passed explicitly to every participating call            │          │
│   │  - Parent write + child replacement commit as one unit      │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       │  tx.repository(...)                                                 │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              Repository (from repositories/)                │          │
│   │  - flush() only, never commit()                             │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       ▼                                                                     │
│   PostgreSQL (asyncpg) / SQLite (aiosqlite, tests)                          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘
"""

from access_control.db.session import AsyncSessionLocal, close_db, engine, get_db, init_db
from access_control.db.transaction import Transaction

__all__ = [
    "AsyncSessionLocal",
    "Transaction",
    "close_db",
    "engine",
    "get_db",
    "init_db",
]

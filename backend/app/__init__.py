"""
Notas Backend - Application Package Initializer
================================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Routes + Templates (HTML)      │  ← pages, redirects
    ├─────────────────────────────────────┤
    │  Access Policy (middleware+service) │  ← opening hours, note cap
    ├─────────────────────────────────────┤
    │        Note Service (store ops)     │  ← count, list, create, delete-all
    ├─────────────────────────────────────┤
    │    Models & Database (SQLAlchemy)   │  ← Notas table on SQLite
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

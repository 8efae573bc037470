"""Declarative base and type-map for the seq-spine ORM tables.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map``
that maps Python built-in types to portable SA column types, so the same
metadata provisions SQLite and PostgreSQL.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase


class SeqBase(DeclarativeBase):
    """Shared declarative base for every seq-spine table.

    * ``str``  → ``String(64)``
    * ``int``  → ``Integer``

    Identifier columns that may exceed 32 bits declare ``BigInteger``
    explicitly.
    """

    type_annotation_map = {
        str: String(64),
        int: Integer,
    }


__all__ = ["SeqBase"]

"""
PostgreSQL repository adapter - Implements RegistrationRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness:
-----------
The unique index on lower(btrim(email)) mirrors the domain's email
normalization, so two concurrent submits of the same address cannot both
be stored. add_registration uses INSERT ... ON CONFLICT DO NOTHING and
reports the outcome through the affected row count.
"""

import logging
from datetime import date

import psycopg
from psycopg_pool import ConnectionPool, PoolTimeout

from src.domain.exceptions import RegistryUnavailable
from src.domain.registration import Registration

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS registrations (
        id BIGSERIAL PRIMARY KEY,
        nom TEXT NOT NULL,
        prenom TEXT NOT NULL,
        email TEXT NOT NULL,
        date_naissance DATE NOT NULL,
        cp CHAR(5) NOT NULL,
        ville TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );
    CREATE UNIQUE INDEX IF NOT EXISTS registrations_email_key
        ON registrations (lower(btrim(email)));
"""


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def list_registrations(self) -> list[Registration]:
        """Return all registrations in insertion order."""
        sql = """
            SELECT nom, prenom, email, date_naissance, cp, ville
            FROM registrations
            ORDER BY id
        """
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        except (psycopg.OperationalError, PoolTimeout) as e:
            logger.warning("Database unavailable while listing registrations: %s", e)
            raise RegistryUnavailable("Database unavailable") from e

        return [
            Registration(
                nom=nom,
                prenom=prenom,
                email=email,
                date_naissance=date_naissance.isoformat(),
                cp=cp,
                ville=ville,
            )
            for nom, prenom, email, date_naissance, cp, ville in rows
        ]

    def add_registration(self, registration: Registration) -> bool:
        """
        Insert a registration.

        Returns:
            True if inserted, False if the normalized email already exists
        """
        sql = """
            INSERT INTO registrations (nom, prenom, email, date_naissance, cp, ville)
            VALUES (%s, %s, %s, %s, %s, %s)
            ON CONFLICT DO NOTHING
        """
        params = (
            registration.nom,
            registration.prenom,
            registration.email,
            date.fromisoformat(registration.date_naissance),
            registration.cp,
            registration.ville,
        )
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                conn.commit()
                return cursor.rowcount == 1
        except (psycopg.OperationalError, PoolTimeout) as e:
            logger.warning("Database unavailable while storing registration: %s", e)
            raise RegistryUnavailable("Database unavailable") from e

    def count_registrations(self) -> int:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute("SELECT COUNT(*) FROM registrations")
                (count,) = cursor.fetchone()
        except (psycopg.OperationalError, PoolTimeout) as e:
            logger.warning("Database unavailable while counting registrations: %s", e)
            raise RegistryUnavailable("Database unavailable") from e
        return count


def ensure_schema(pool: ConnectionPool) -> None:
    """
    Create the registrations table and its email index if missing.

    Idempotent; run once at application startup.

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    logger.info("Ensuring registrations schema")
    try:
        with pool.connection() as conn:
            conn.execute(SCHEMA_SQL)
    except Exception as e:
        logger.error("Schema setup failed - %s", e)
        raise RuntimeError("Database schema setup failed") from e

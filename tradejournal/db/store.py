"""SQLite data store for the trade journal."""

import json
import logging
import sqlite3
import time
from datetime import date
from pathlib import Path
from typing import Optional

from tradejournal.db.records import normalize_settings, normalize_trade, to_number
from tradejournal.models import Account, Settings, Trade

logger = logging.getLogger(__name__)


class JournalStore:
    """SQLite-based store for trades and settings.

    Rows are normalized on the way out, so a hand-edited or legacy database
    still yields well-formed trades.
    """

    REQUIRED_TABLES = [
        "trades",
        "settings",
    ]

    SETTINGS_KEY = "settings"

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL,
                    symbol TEXT,
                    notes TEXT,
                    risk_type TEXT NOT NULL,
                    risk_value REAL NOT NULL,
                    account TEXT NOT NULL DEFAULT 'REAL',
                    result_type TEXT NOT NULL,
                    result_value REAL NOT NULL,
                    created_at REAL NOT NULL
                )
            """)

            # Key/value table holding JSON documents
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    @staticmethod
    def _trade_params(trade: Trade) -> tuple:
        return (
            trade.id,
            trade.date.isoformat(),
            trade.symbol,
            trade.notes,
            trade.risk_type.value,
            to_number(trade.risk_value),
            trade.account.value,
            trade.result_type.value,
            to_number(trade.result_value),
            to_number(trade.created_at),
        )

    def save_trade(self, trade: Trade) -> None:
        """Insert a trade, replacing any stored trade with the same id.

        Args:
            trade: Trade to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO trades
                (id, date, symbol, notes, risk_type, risk_value, account,
                 result_type, result_value, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                self._trade_params(trade),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Saved trade %s", trade.id)

    def replace_trades(self, trades: list[Trade]) -> None:
        """Replace every stored trade with ``trades`` in one transaction."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades")
            cursor.executemany(
                """
                INSERT OR REPLACE INTO trades
                (id, date, symbol, notes, risk_type, risk_value, account,
                 result_type, result_value, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [self._trade_params(trade) for trade in trades],
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Replaced journal with %d trades", len(trades))

    def delete_trade(self, trade_id: str) -> bool:
        """Delete a trade.

        Args:
            trade_id: Trade ID to delete.

        Returns:
            True if a trade was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def get_trade(self, trade_id: str, reference_date: Optional[date] = None) -> Optional[Trade]:
        """Get a single trade by id."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM trades WHERE id = ?", (trade_id,))
            row = cursor.fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        return normalize_trade(dict(row), reference_date or date.today(), time.time() * 1000)

    def get_trades(
        self,
        account: Optional[Account] = None,
        reference_date: Optional[date] = None,
    ) -> list[Trade]:
        """Get trades from the database.

        Args:
            account: Optional account filter. If None, returns all trades.
            reference_date: Date given to rows with a missing or unreadable date.

        Returns:
            List of trades ordered by date and creation time.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if account:
                cursor.execute(
                    "SELECT * FROM trades WHERE account = ? ORDER BY date, created_at",
                    (account.value,),
                )
            else:
                cursor.execute("SELECT * FROM trades ORDER BY date, created_at")
            rows = [dict(row) for row in cursor.fetchall()]
        finally:
            conn.close()

        today = reference_date or date.today()
        now_ms = time.time() * 1000
        trades = []
        for row in rows:
            trade = normalize_trade(row, today, now_ms)
            if trade is None:
                logger.warning("Skipping stored trade without id")
                continue
            trades.append(trade)
        return trades

    # ==================== Settings ====================

    def load_settings(self) -> Optional[Settings]:
        """Load stored settings.

        Returns:
            Normalized settings, or None if none were saved or they are unreadable.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM settings WHERE key = ?", (self.SETTINGS_KEY,))
            row = cursor.fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        try:
            raw = json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning("Stored settings are not valid JSON, ignoring them")
            return None
        return normalize_settings(raw)

    def save_settings(self, settings: Settings) -> None:
        """Save settings, replacing any stored ones."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (self.SETTINGS_KEY, settings.model_dump_json()),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Saved settings")

    def reset(self) -> None:
        """Delete all trades and settings."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades")
            cursor.execute("DELETE FROM settings")
            conn.commit()
        finally:
            conn.close()
        logger.info("Journal reset")

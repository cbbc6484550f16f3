"""
Database Manager for Royal Calculator
Handles SQLite storage for the calculation tape
"""
import sqlite3
from datetime import datetime
import config

class Database:
    def __init__(self, db_path=config.DB_PATH):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database tables"""
        conn = self.get_connection()
        cursor = conn.cursor()

        # Calculations history table
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS calculations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                expression TEXT NOT NULL,
                result TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                session_id TEXT
            )
        ''')

        # Migration: tapes written before web sessions existed have no session column
        cursor.execute("PRAGMA table_info(calculations)")
        calc_columns = [column[1] for column in cursor.fetchall()]
        if 'session_id' not in calc_columns:
            cursor.execute('ALTER TABLE calculations ADD COLUMN session_id TEXT')
            print("Database migrated: Added session_id column to calculations")

        conn.commit()
        conn.close()

    def add_calculation(self, expression, result, session_id=None):
        """Add calculation to history"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO calculations (expression, result, timestamp, session_id)
            VALUES (?, ?, ?, ?)
        ''', (expression, result, timestamp, session_id))
        conn.commit()
        calc_id = cursor.lastrowid
        conn.close()
        return calc_id

    def get_calculations(self, limit=config.MAX_HISTORY_ITEMS, session_id=None):
        """Retrieve calculation history, newest first"""
        conn = self.get_connection()
        cursor = conn.cursor()

        query = 'SELECT expression, result, timestamp FROM calculations'
        params = []
        if session_id:
            query += ' WHERE session_id = ?'
            params.append(session_id)
        query += ' ORDER BY timestamp DESC, id DESC LIMIT ?'
        params.append(limit)

        cursor.execute(query, params)
        calculations = cursor.fetchall()
        conn.close()
        return calculations

    def count_calculations(self):
        """Number of calculations on the tape"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('SELECT COUNT(*) FROM calculations')
        count = cursor.fetchone()[0]
        conn.close()
        return count

    def clear_history(self, session_id=None):
        """Clear calculation history, optionally for one session only"""
        conn = self.get_connection()
        cursor = conn.cursor()
        if session_id:
            cursor.execute('DELETE FROM calculations WHERE session_id = ?', (session_id,))
        else:
            cursor.execute('DELETE FROM calculations')
        conn.commit()
        conn.close()

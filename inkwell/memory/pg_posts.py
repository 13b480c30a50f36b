# inkwell/memory/pg_posts.py

from typing import Any, Dict, List, Optional
import logging
from contextlib import contextmanager

import psycopg2
from psycopg2.extras import RealDictCursor

from inkwell.config import POSTS_DB_URL

logger = logging.getLogger(__name__)

# Columns a client may write
POST_FIELDS = ("title", "content", "outline", "style", "tone")


class PostStoreError(Exception):
    pass


# =========================================================
# SCHEMA
# =========================================================

POSTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS posts (
    id SERIAL PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    content TEXT NOT NULL DEFAULT '',
    outline TEXT NOT NULL DEFAULT '',
    style TEXT NOT NULL DEFAULT '',
    tone TEXT NOT NULL DEFAULT '',
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


class PostStore:
    """
    Saved documents in Postgres.
    Every psycopg2 failure surfaces as PostStoreError.
    """

    def __init__(self, db_url: str = POSTS_DB_URL):
        self._db_url = db_url

    # =====================================================
    # CONNECTION HANDLING (SAFE)
    # =====================================================

    @contextmanager
    def get_connection(self):
        conn = None
        try:
            conn = psycopg2.connect(self._db_url)
            yield conn
            conn.commit()
        except psycopg2.Error as e:
            if conn:
                conn.rollback()
            raise PostStoreError(str(e)) from e
        except Exception:
            if conn:
                conn.rollback()
            raise
        finally:
            if conn:
                conn.close()

    def init_schema(self) -> None:
        """
        Safe to run multiple times (IF NOT EXISTS).
        """
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(POSTS_SCHEMA)

    def ping(self) -> bool:
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
            return True
        except PostStoreError:
            return False

    # =====================================================
    # READ
    # =====================================================

    def list_posts(self) -> List[Dict[str, Any]]:
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    """
                    SELECT id, title, outline, style, tone, created_at, updated_at
                    FROM posts
                    ORDER BY updated_at DESC
                    """
                )
                return [dict(row) for row in cur.fetchall() or []]

    def get_post(self, post_id: int) -> Optional[Dict[str, Any]]:
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute("SELECT * FROM posts WHERE id = %s", (post_id,))
                row = cur.fetchone()
                return dict(row) if row else None

    # =====================================================
    # WRITE
    # =====================================================

    def create_post(
        self,
        title: str = "",
        content: str = "",
        outline: str = "",
        style: str = "",
        tone: str = "",
    ) -> Dict[str, Any]:
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    """
                    INSERT INTO posts (title, content, outline, style, tone)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING *
                    """,
                    (title, content, outline, style, tone),
                )
                return dict(cur.fetchone())

    def update_post(self, post_id: int, **fields: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Partial update: None / missing fields keep their stored value.
        """
        values = [fields.get(name) for name in POST_FIELDS]

        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    """
                    UPDATE posts
                    SET
                        title = COALESCE(%s, title),
                        content = COALESCE(%s, content),
                        outline = COALESCE(%s, outline),
                        style = COALESCE(%s, style),
                        tone = COALESCE(%s, tone),
                        updated_at = NOW()
                    WHERE id = %s
                    RETURNING *
                    """,
                    (*values, post_id),
                )
                row = cur.fetchone()
                return dict(row) if row else None

    def delete_post(self, post_id: int) -> bool:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM posts WHERE id = %s RETURNING id",
                    (post_id,),
                )
                return cur.fetchone() is not None

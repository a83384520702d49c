"""
Database persistence layer for recipes, shopping lists and events.

This module owns the SQLAlchemy engine, the session factory and the ORM tables.
The database URL comes from DATABASE_URL (see api.config.DatabaseConfig); when
it is not set, a SQLite file under data/ is used so the app works out of the box.

Tables:
- recipes / recipe_ingredients: scraped recipes and their ordered ingredient lines
- shopping_lists / shopping_list_items: user lists and their ordered line items
- shopping_list_recipes: many-to-many link between lists and contributing recipes
- events: analytics events written by sniper.events
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    create_engine,
)
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from api.config import DatabaseConfig

logger = logging.getLogger(__name__)

Base = declarative_base()

# Database engine and session factory, (re)built by configure_database()
engine = None
SessionLocal = None


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite DateTime columns do not keep tzinfo)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


shopping_list_recipes = Table(
    "shopping_list_recipes",
    Base.metadata,
    Column("shopping_list_id", Integer, ForeignKey("shopping_lists.id", ondelete="CASCADE"), primary_key=True),
    Column("recipe_id", Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
)


class RecipeRow(Base):
    """Recipes table - one row per scraped page."""
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(2048), nullable=False)
    title = Column(String(500), nullable=False)
    raw_html = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    ingredients = relationship(
        "RecipeIngredientRow",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredientRow.position",
    )
    shopping_lists = relationship(
        "ShoppingListRow",
        secondary=shopping_list_recipes,
        back_populates="recipes",
    )


class RecipeIngredientRow(Base):
    """Ingredient lines parsed from a recipe."""
    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(500), nullable=False)
    quantity = Column(String(100), nullable=True)
    unit = Column(String(100), nullable=True)
    raw_text = Column(Text, nullable=False)

    recipe = relationship("RecipeRow", back_populates="ingredients")


class ShoppingListRow(Base):
    """Shopping lists table."""
    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    recipes = relationship(
        "RecipeRow",
        secondary=shopping_list_recipes,
        back_populates="shopping_lists",
        order_by="RecipeRow.id",
    )
    items = relationship(
        "ShoppingListItemRow",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        order_by="ShoppingListItemRow.position",
    )


class ShoppingListItemRow(Base):
    """Line items owned by a shopping list."""
    __tablename__ = "shopping_list_items"

    id = Column(Integer, primary_key=True, index=True)
    shopping_list_id = Column(Integer, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(500), nullable=False)
    quantity = Column(String(255), nullable=True)
    unit = Column(String(100), nullable=True)

    shopping_list = relationship("ShoppingListRow", back_populates="items")


class EventRow(Base):
    """Events table - stores analytics events for user actions."""
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime, nullable=False, index=True)  # UTC timestamp
    session_id = Column(String(255), nullable=True, index=True)
    event_type = Column(String(100), nullable=False, index=True)
    payload = Column(Text, nullable=True)  # JSON string

    __table_args__ = (
        Index("idx_event_type_ts", "event_type", "ts"),
    )


def configure_database(database_url: Optional[str] = None) -> None:
    """
    Create (or re-create) the engine and session factory.

    Called on import with the configured URL. Tests call it again to point the
    app at a throwaway SQLite file.

    Args:
        database_url: SQLAlchemy URL. Defaults to DatabaseConfig.get_url().
    """
    global engine, SessionLocal

    url = make_url(database_url or DatabaseConfig.get_url())
    connect_args: Dict[str, Any] = {}

    if url.get_backend_name() == "sqlite":
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    if engine is not None:
        engine.dispose()

    engine = create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        echo=False,  # Set to True for SQL query logging
        connect_args=connect_args,
    )
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    logger.info(f"Database engine configured ({url.get_backend_name()})")


def init_db() -> None:
    """
    Initialize database tables (create if they don't exist).

    This function is safe to call multiple times - it only creates tables
    that don't already exist.

    Raises:
        Exception: If database connection fails or table creation fails
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized (or already exist)")
    except Exception as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise


def get_db_session():
    """
    Get a database session.

    Callers own the session and must close it.

    Returns:
        SQLAlchemy Session object
    """
    return SessionLocal()


def db_log_event(event_type: str, session_id: Optional[str], payload: Optional[Dict[str, Any]] = None) -> None:
    """
    Persist one analytics event.

    Args:
        event_type: Event name (e.g. "recipe_added")
        session_id: Optional frontend session identifier
        payload: JSON-serializable event details

    Raises:
        Exception: Any database error (sniper.events swallows it)
    """
    db = get_db_session()
    try:
        db.add(EventRow(
            ts=utcnow(),
            session_id=session_id,
            event_type=event_type,
            payload=json.dumps(payload or {}, ensure_ascii=False),
        ))
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


configure_database()

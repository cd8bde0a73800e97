"""Shared test fixtures for the page builder backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.config import Settings
from backend.database import create_engine, init_db
from backend.main import create_app

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine


@asynccontextmanager
async def create_test_client(settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client with an initialized database.

    Performs the work of the application lifespan manually because
    ASGITransport does not trigger it.
    """
    app = create_app(settings)
    engine, session_factory = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = session_factory

    await init_db(engine, session_factory)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    await engine.dispose()


def _component_payload(
    component_id: int = 1, name: str = "Heading", **overrides: Any
) -> dict[str, Any]:
    """Build a component payload in wire format."""
    payload: dict[str, Any] = {
        "id": component_id,
        "name": name,
        "icon": "type",
        "category": "text",
        "description": "A heading",
        "properties": [
            {
                "name": "fontSize",
                "value": 16,
                "label": "Font Size",
                "type": "number",
                "category": "typography",
            },
            {
                "name": "textAlign",
                "value": "left",
                "label": "Text Alignment",
                "type": "select",
                "category": "typography",
                "options": ["left", "center", "right"],
                "required": True,
            },
        ],
        "canContainContent": True,
        "defaultContent": [{"type": "text", "content": "Heading"}],
        "tags": ["text", "title"],
    }
    payload.update(overrides)
    return payload


def _page_payload(*element_ids: int, bg_color: str = "#ffffff") -> dict[str, Any]:
    """Build a page payload in wire format with one element per id."""
    return {
        "elements": [
            {
                "id": element_id,
                "type": "heading",
                "position": {"x": 10.5 * element_id, "y": 20.0},
                "size": {"width": 200.0, "height": 100.0},
                "props": {"text": f"Element {element_id}", "style": {"color": "#000000"}},
            }
            for element_id in element_ids
        ],
        "settings": {
            "responsive": False,
            "width": 1024,
            "height": 768,
            "maxWidth": "1200px",
            "bgColor": bg_color,
        },
    }


@pytest.fixture
def make_component() -> Callable[..., dict[str, Any]]:
    """Factory for component payloads."""
    return _component_payload


@pytest.fixture
def make_page() -> Callable[..., dict[str, Any]]:
    """Factory for page payloads."""
    return _page_payload


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings backed by a temporary SQLite file."""
    db_path = tmp_path / "test.db"
    return Settings(
        _env_file=None,
        debug=True,
        database_url=f"sqlite+aiosqlite:///{db_path}",
    )


@pytest.fixture
async def db_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine with the schema initialized."""
    engine, session_factory = create_engine(test_settings)
    await init_db(engine, session_factory)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """HTTP client against a freshly initialized app."""
    async with create_test_client(test_settings) as ac:
        yield ac

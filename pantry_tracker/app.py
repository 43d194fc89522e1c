import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse

from .core.config import Config
from .core.errors import StoreUnavailable
from .core.middleware import global_exception_handler, log_requests, store_unavailable_handler
from .core.models import AddItemRequest, InventoryResponse
from .core.validation import validate_item_name
from .services.inventory_sync import InventorySyncController
from .services.memory_store import InMemoryDocumentStore
from .services.search import filter_items
from .services.supabase_service import SupabaseDocumentStore
from .view.page import render_page
from .view.state import ViewSession

logger = logging.getLogger(__name__)


def build_document_store():
    """Pick the document store for the configured environment."""
    if Config.is_development():
        logger.info("Development mode: using in-memory inventory store")
        return InMemoryDocumentStore()
    return SupabaseDocumentStore()


def _session(request: Request) -> ViewSession:
    return request.app.state.session


def _back_to_page() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


def _page_item_name(session: ViewSession, raw: str) -> Optional[str]:
    """Validated name for a page action, or None after posting the error as a notification."""
    try:
        return validate_item_name(raw)
    except HTTPException as e:
        session.state = session.state.notify(e.detail)
        return None


def _mutation_result(name: str, item) -> dict:
    return {
        "name": name,
        "quantity": item.quantity if item is not None else 0,
        "deleted": item is None,
    }


def create_app(store=None, *, validate_config: Optional[bool] = None) -> FastAPI:
    """Build the FastAPI application around one inventory session.

    Without an explicit ``store`` the environment decides between Supabase
    and the in-memory store, and the configuration is validated at startup.
    """
    if validate_config is None:
        validate_config = store is None
    if store is None:
        store = build_document_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if validate_config:
            Config.validate()
        # A failed initial load leaves an empty list and a notification
        await app.state.session.load()
        yield

    app = FastAPI(title="Pantry Tracker", lifespan=lifespan)
    app.state.store = store
    app.state.session = ViewSession(controller=InventorySyncController(store))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # --- HTML page and its form actions ---

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request, q: Optional[str] = None):
        """Render the inventory page. ``q`` replaces the search term."""
        session = _session(request)
        if q is not None:
            session.search(q)
        return HTMLResponse(render_page(session.state))

    @app.post("/dialog/open")
    async def open_dialog(request: Request):
        _session(request).open_dialog()
        return _back_to_page()

    @app.post("/dialog/close")
    async def close_dialog(request: Request):
        _session(request).close_dialog()
        return _back_to_page()

    @app.post("/dialog/submit")
    async def submit_dialog(request: Request, item_name: str = Form("")):
        session = _session(request)
        try:
            name = validate_item_name(item_name)
        except HTTPException as e:
            # Dialog stays open so the name can be corrected
            session.state = session.state.set_item_name(item_name).notify(e.detail)
            return _back_to_page()
        await session.submit_dialog(name)
        return _back_to_page()

    @app.post("/items/{name:path}/add")
    async def add_from_page(request: Request, name: str):
        session = _session(request)
        name = _page_item_name(session, name)
        if name is not None:
            await session.add(name)
        return _back_to_page()

    @app.post("/items/{name:path}/remove")
    async def remove_from_page(request: Request, name: str):
        session = _session(request)
        name = _page_item_name(session, name)
        if name is not None:
            await session.remove(name)
        return _back_to_page()

    @app.post("/notification/dismiss")
    async def dismiss_notification(request: Request):
        _session(request).dismiss_notification()
        return _back_to_page()

    # --- JSON API ---

    @app.get("/api/items", response_model=InventoryResponse)
    async def list_items(request: Request, q: str = ""):
        """Filter the local mirror. Does not query the store."""
        items = filter_items(_session(request).controller.inventory, q)
        return InventoryResponse(items=items, total=len(items), search_term=q)

    @app.post("/api/items")
    async def add_item(request: Request, payload: AddItemRequest):
        name = validate_item_name(payload.name)
        session = _session(request)
        item = await session.controller.add_item(name)
        session.sync()
        return _mutation_result(name, item)

    @app.post("/api/items/{name:path}/increment")
    async def increment_item(request: Request, name: str):
        name = validate_item_name(name)
        session = _session(request)
        item = await session.controller.add_item(name)
        session.sync()
        return _mutation_result(name, item)

    @app.post("/api/items/{name:path}/decrement")
    async def decrement_item(request: Request, name: str):
        name = validate_item_name(name)
        session = _session(request)
        item = await session.controller.remove_item(name)
        session.sync()
        return _mutation_result(name, item)

    @app.post("/api/refresh", response_model=InventoryResponse)
    async def refresh_items(request: Request):
        session = _session(request)
        items = await session.controller.refresh()
        session.sync()
        return InventoryResponse(items=items, total=len(items))

    @app.get("/health")
    async def health_check(request: Request):
        """Check that the document store answers."""
        health_start_time = time.time()

        try:
            await asyncio.to_thread(request.app.state.store.ping)
            health_duration = time.time() - health_start_time

            return {
                "status": "healthy",
                "service": "pantry-tracker",
                "timestamp": datetime.now().isoformat(),
                "response_time_ms": round(health_duration * 1000, 2)
            }
        except StoreUnavailable as e:
            health_duration = time.time() - health_start_time
            logger.error(f"Health check failed: {str(e)} - Duration: {health_duration:.1f}s")

            return {
                "status": "unhealthy",
                "service": "pantry-tracker",
                "timestamp": datetime.now().isoformat(),
                "error": str(e),
                "response_time_ms": round(health_duration * 1000, 2)
            }

    @app.get("/api")
    async def root():
        """Return basic API information."""
        return {
            "service": "Pantry Tracker",
            "version": "1.0",
            "endpoints": {
                "page": "/",
                "items": "/api/items",
                "refresh": "/api/refresh",
                "health": "/health"
            },
            "timestamp": datetime.now().isoformat(),
            "description": "Track pantry items and their quantities in a Supabase table"
        }

    return app


app = create_app()

"""Items: a JSON API whose handlers only return values.

CRUD for an in-memory "items" resource. Demonstrates the API router:
dict/list returns become JSON, awaitables nested in the result are
resolved, ApiError maps to a status code, and a custom error formatter
shapes unexpected failures.

Run with any ASGI server:
    uvicorn app:app --app-dir examples/items
"""

import asyncio
import logging
from dataclasses import asdict, dataclass

from apirouter import ApiError, ApiRouter

logger = logging.getLogger("examples.items")


@dataclass(slots=True)
class Item:
    id: int
    title: str
    done: bool = False


_items: dict[int, Item] = {}
_next_id = 1


async def _load(item_id: int) -> Item:
    await asyncio.sleep(0)  # stands in for a database round trip
    item = _items.get(item_id)
    if item is None:
        raise ApiError(f"item {item_id} not found", 404)
    return item


async def _count_open() -> int:
    await asyncio.sleep(0)
    return sum(1 for item in _items.values() if not item.done)


def format_error(error, request, response):
    logger.warning("unexpected %s on %s %s", type(error).__name__, request.method, request.path)
    return {"error": "unexpected", "kind": type(error).__name__}


app = ApiRouter(error_formatter=format_error)


@app.get("/api/items")
def list_items(request, response, next):
    ordered = sorted(_items.values(), key=lambda item: item.id)
    return {
        "data": [asdict(item) for item in ordered],
        "meta": {"total": len(ordered), "open": _count_open()},
    }


@app.get("/api/items/{item_id:int}")
async def get_item(request, response, next):
    item = await _load(int(request.path_params["item_id"]))
    return {"data": asdict(item)}


@app.post("/api/items")
async def create_item(request, response, next):
    global _next_id
    payload = await request.json()
    title = str(payload.get("title", "")).strip()
    if not title:
        raise ApiError({"error": "title is required"}, 422)
    item = Item(id=_next_id, title=title)
    _items[item.id] = item
    _next_id += 1
    response.status(201)
    return {"data": asdict(item)}


def require_json(request, response, next):
    if request.content_type != "application/json":
        raise ApiError("expected application/json", 415)
    next()


async def toggle_item(request, response, next):
    item = await _load(int(request.path_params["item_id"]))
    item.done = not item.done
    return {"data": asdict(item)}


app.put("/api/items/{item_id:int}/toggle", require_json, toggle_item)


@app.delete("/api/items/{item_id:int}")
async def delete_item(request, response, next):
    item = await _load(int(request.path_params["item_id"]))
    del _items[item.id]
    return "deleted"


@app.get("/api/boom")
def boom(request, response, next):
    return {"per_item": 1 // len(_items)}

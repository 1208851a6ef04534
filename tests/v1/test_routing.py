# tests/v1/test_routing.py
import inspect

from fastapi.routing import APIRoute


def test_store_backed_handlers_run_in_threadpool(app) -> None:
    """Handlers that wait on the store lock are plain functions, not coroutines."""
    routes = [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path.startswith("/api/v1")
    ]
    coroutines = {
        route.path
        for route in routes
        if inspect.iscoroutinefunction(route.endpoint)
    }

    assert routes
    # Uploads await the request body and hand disk writes to the threadpool.
    assert coroutines == {"/api/v1/upload"}

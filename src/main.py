"""Cat API — FastAPI application entry point.

Serves the cat routes over plain HTTP (local development, or Lambda
behind an HTTP API through Mangum). Each route turns the request into
a proxy event and hands it to the same dispatcher the REST Lambda
handler uses, so both deployments answer identically.
"""

import base64
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from src.api.dispatcher import handle_event
from src.logging.audit import get_logger, setup_logging

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging()
    get_logger().info("Cat API started")
    yield
    get_logger().info("Cat API stopped")


app = FastAPI(
    title="Cat API",
    description="CRUD over an in-memory collection of cats",
    version=VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}


@app.get("/api/cat/list/")
async def list_cats(request: Request):
    return await _forward(request)


@app.get("/api/cat/single/{id}")
async def get_cat(request: Request, id: str):
    return await _forward(request, {"id": id})


@app.post("/api/cat/new/")
async def create_cat(request: Request):
    return await _forward(request)


@app.delete("/api/cat/delete/{id}")
async def delete_cat(request: Request, id: str):
    return await _forward(request, {"id": id})


@app.api_route("/{path:path}", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def fallback(request: Request):
    """Anything else still goes to the dispatcher, which owns the 400/405 answers."""
    return await _forward(request)


async def _forward(request: Request, path_parameters: dict | None = None) -> Response:
    raw_body = await request.body()
    event = {
        "httpMethod": request.method,
        "path": request.url.path,
        "pathParameters": path_parameters,
        # Same encoding API Gateway uses for binary bodies
        "body": base64.b64encode(raw_body).decode("ascii") if raw_body else None,
        "isBase64Encoded": bool(raw_body),
    }
    result = await handle_event(event)
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result.get("headers"),
    )

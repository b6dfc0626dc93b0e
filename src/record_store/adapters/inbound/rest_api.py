"""REST API adapter for the record store.

This module provides a FastAPI-based REST API over a RecordStore.

Endpoints:
    GET  /health                                        - Health check
    GET  /stats                                         - Store statistics
    POST /databases                                     - Create a database
    GET  /databases                                     - List databases
    POST /databases/{db}/collections                    - Create a collection
    GET  /databases/{db}/collections                    - List collections
    POST /databases/{db}/collections/{c}/records        - Write a record
    GET  /databases/{db}/collections/{c}/records        - List all records
    GET  /databases/{db}/collections/{c}/records/{id}   - Read a record
    PUT  /databases/{db}/collections/{c}/records/{id}   - Update a record

Usage:
    from record_store.adapters.inbound.rest_api import create_app
    from record_store.application import DatabaseManager

    app = create_app(DatabaseManager(data_dir="/path/to/data"))
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from record_store import __version__
from record_store.domain.exceptions import (
    ConflictError,
    DataError,
    InvalidNameError,
    NotFoundError,
    RecordStoreError,
    SchemaError,
    StorageError,
)
from record_store.ports.inbound import RecordStore

_STATUS_BY_ERROR: list[tuple[type[RecordStoreError], int]] = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (SchemaError, 422),
    (DataError, 422),
    (InvalidNameError, 422),
    (StorageError, 500),
]


class CreateDatabaseRequest(BaseModel):
    """Request model for database creation."""

    name: str = Field(..., description="Database name")


class CreateCollectionRequest(BaseModel):
    """Request model for collection creation."""

    name: str = Field(..., description="Collection name")
    fields: dict[str, str] = Field(
        ..., description="Ordered field name -> type (integer, string, boolean)"
    )
    identity_field: str = Field(..., description="Field whose value identifies a record")


class RecordRequest(BaseModel):
    """Request model carrying one record."""

    values: list[str] = Field(..., description="Field values in schema order")


class WriteResponse(BaseModel):
    """Response model for record writes."""

    identity: str = Field(..., description="Identity value of the stored record")


class RecordResponse(BaseModel):
    """Response model for a single record."""

    values: list[str] = Field(..., description="Field values in schema order")


class RecordsResponse(BaseModel):
    """Response model for a record listing."""

    records: list[list[str]] = Field(default_factory=list, description="All records")


class NamesResponse(BaseModel):
    """Response model for database or collection listings."""

    names: list[str] = Field(default_factory=list, description="Sorted names")


class StatsResponse(BaseModel):
    """Response model for store statistics."""

    databases: int = Field(..., description="Number of databases")
    collections: int = Field(..., description="Number of collections")
    records: int = Field(..., description="Number of stored records")
    per_database: dict[str, dict[str, int]] = Field(
        default_factory=dict, description="Record counts per collection"
    )


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


class ErrorResponse(BaseModel):
    """Response model for failed operations."""

    error: str = Field(..., description="Error class name")
    reason: str = Field(..., description="Short failure reason")
    detail: str = Field(..., description="Human-readable message")
    field: str | None = Field(None, description="Offending field, if any")


def status_for(error: RecordStoreError) -> int:
    """HTTP status code for a record store error."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


def create_app(store: RecordStore) -> FastAPI:
    """Create a FastAPI application for the record store.

    Args:
        store: The record store to expose.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="Record Store API",
        description="REST API for schema-checked record collections",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RecordStoreError)
    async def record_store_error_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
        body = ErrorResponse(
            error=type(exc).__name__,
            reason=exc.reason,
            detail=str(exc),
            field=getattr(exc, "field", None),
        )
        return JSONResponse(status_code=status_for(exc), content=body.model_dump())

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/stats", response_model=StatsResponse, tags=["Stats"])
    async def get_stats() -> StatsResponse:
        """Get store statistics."""
        stats = store.get_stats()
        return StatsResponse(
            databases=stats.databases,
            collections=stats.collections,
            records=stats.records,
            per_database=stats.per_database,
        )

    @app.post("/databases", status_code=201, tags=["Databases"])
    async def create_database(request: CreateDatabaseRequest) -> dict[str, str]:
        """Create a database."""
        store.create_database(request.name)
        return {"message": f"Database {request.name} created"}

    @app.get("/databases", response_model=NamesResponse, tags=["Databases"])
    async def list_databases() -> NamesResponse:
        """List databases."""
        return NamesResponse(names=sorted(store.list_databases()))

    @app.post("/databases/{database}/collections", status_code=201, tags=["Collections"])
    async def create_collection(database: str, request: CreateCollectionRequest) -> dict[str, str]:
        """Create a collection with a fixed schema."""
        store.create_collection(database, request.name, request.fields, request.identity_field)
        return {"message": f"Collection {request.name} created"}

    @app.get(
        "/databases/{database}/collections",
        response_model=NamesResponse,
        tags=["Collections"],
    )
    async def list_collections(database: str) -> NamesResponse:
        """List the collections of a database."""
        return NamesResponse(names=sorted(store.list_collections(database)))

    @app.post(
        "/databases/{database}/collections/{collection}/records",
        response_model=WriteResponse,
        status_code=201,
        tags=["Records"],
    )
    async def write_record(database: str, collection: str, request: RecordRequest) -> WriteResponse:
        """Validate and store a record."""
        identity = store.write_record(database, collection, request.values)
        return WriteResponse(identity=identity)

    @app.get(
        "/databases/{database}/collections/{collection}/records",
        response_model=RecordsResponse,
        tags=["Records"],
    )
    async def list_all_records(database: str, collection: str) -> RecordsResponse:
        """List every record of a collection."""
        return RecordsResponse(records=store.list_all_records(database, collection))

    @app.get(
        "/databases/{database}/collections/{collection}/records/{identity}",
        response_model=RecordResponse,
        tags=["Records"],
    )
    async def read_record(database: str, collection: str, identity: str) -> RecordResponse:
        """Read a record by identity value."""
        values = store.read_record(database, collection, identity)
        if not values:
            raise NotFoundError("record", identity)
        return RecordResponse(values=values)

    @app.put(
        "/databases/{database}/collections/{collection}/records/{identity}",
        response_model=RecordResponse,
        tags=["Records"],
    )
    async def update_record(
        database: str, collection: str, identity: str, request: RecordRequest
    ) -> RecordResponse:
        """Replace a record."""
        values = store.update_record(database, collection, identity, request.values)
        return RecordResponse(values=values)

    return app


def run_server(
    store: RecordStore,
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Run the REST API server.

    Args:
        store: The record store.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(store)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    from record_store.infrastructure.container import Container

    container = Container.create()
    run_server(
        container.manager,
        host=container.config.server.host,
        port=container.config.server.port,
    )

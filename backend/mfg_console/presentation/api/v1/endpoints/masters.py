"""Master-data collection endpoints — the network contract the console's HTTP backend speaks."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from mfg_console.application.interfaces import MasterDataBackend
from mfg_console.domain.entities import MasterRecord
from mfg_console.domain.exceptions import EntityNotFoundError
from mfg_console.infrastructure.dependencies import get_local_master_backend

router = APIRouter(prefix="/masters", tags=["Masters"])


# Declared before /{collection}/{record_id} so "options" is never taken for an id
@router.get("/{collection}/options")
async def list_options(
    collection: str,
    backend: MasterDataBackend = Depends(get_local_master_backend),
) -> list[dict[str, Any]]:
    """Option records for selection controls."""
    return await backend.get_options(collection)


@router.get("/{collection}")
async def list_records(
    collection: str,
    backend: MasterDataBackend = Depends(get_local_master_backend),
) -> list[dict[str, Any]]:
    """Retrieve every record of a collection."""
    return await backend.get_all(collection)


@router.get("/{collection}/{record_id}")
async def get_record(
    collection: str,
    record_id: str,
    backend: MasterDataBackend = Depends(get_local_master_backend),
) -> dict[str, Any]:
    """Retrieve a single record by ID."""
    try:
        return await backend.get_by_id(collection, record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{collection}", status_code=status.HTTP_201_CREATED)
async def create_record(
    collection: str,
    record: MasterRecord = Body(...),
    backend: MasterDataBackend = Depends(get_local_master_backend),
) -> dict[str, Any]:
    """Create a record; the collection id is assigned when absent."""
    return await backend.create(collection, record)


@router.put("/{collection}/{record_id}")
async def update_record(
    collection: str,
    record_id: str,
    record: MasterRecord = Body(...),
    backend: MasterDataBackend = Depends(get_local_master_backend),
) -> dict[str, Any]:
    """Replace an existing record."""
    try:
        return await backend.update(collection, record_id, record)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{collection}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    collection: str,
    record_id: str,
    backend: MasterDataBackend = Depends(get_local_master_backend),
) -> Response:
    """Delete a record by ID."""
    try:
        await backend.delete(collection, record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Router factory exposing a ResourceDefinition as list/get/create/update/delete endpoints."""
from typing import Any, Dict, Mapping, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from supabase import Client

from tutorcenter.core.dependencies import require_capability
from tutorcenter.core.resource import NOT_FOUND_MESSAGE, Resource, ResourceDefinition
from tutorcenter.database.supabase_client import get_user_supabase

NULL_FILTER_VALUE = "null"


def filters_from_query(definition: ResourceDefinition, query_params: Mapping[str, str]) -> Dict[str, Any]:
    """Pick configured filter columns from a query string; the literal 'null' filters IS NULL."""
    filters = {}
    for column in definition.filter_columns:
        if column not in query_params:
            continue
        value = query_params[column]
        filters[column] = None if value == NULL_FILTER_VALUE else value
    return filters


def resource_dependency(definition: ResourceDefinition):
    def get_resource(supabase: Client = Depends(get_user_supabase)) -> Resource:
        return definition.bind(supabase)
    return get_resource


def build_resource_router(
    definition: ResourceDefinition,
    *,
    prefix: str,
    tags: list,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    read_capability: str,
    write_capability: str,
    delete_capability: Optional[str] = None,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags)
    get_resource = resource_dependency(definition)

    @router.get("")
    async def list_records(
        request: Request,
        user: Dict = Depends(require_capability(read_capability)),
        resource: Resource = Depends(get_resource)
    ):
        return resource.list(filters_from_query(definition, request.query_params)).unwrap()

    @router.get("/{record_id}")
    async def get_record(
        record_id: str,
        user: Dict = Depends(require_capability(read_capability)),
        resource: Resource = Depends(get_resource)
    ):
        record = resource.get(record_id).unwrap()
        if record is None:
            raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
        return record

    @router.post("", status_code=201)
    async def create_record(
        body: create_model,
        user: Dict = Depends(require_capability(write_capability)),
        resource: Resource = Depends(get_resource)
    ):
        return resource.insert(body.model_dump(mode="json"), user["id"]).unwrap(status_code=400)

    @router.patch("/{record_id}")
    async def update_record(
        record_id: str,
        body: update_model,
        user: Dict = Depends(require_capability(write_capability)),
        resource: Resource = Depends(get_resource)
    ):
        updates = body.model_dump(mode="json", exclude_unset=True)
        if not updates:
            raise HTTPException(status_code=400, detail="No fields to update")
        return resource.update(record_id, updates).unwrap(status_code=400)

    @router.delete("/{record_id}", status_code=204)
    async def delete_record(
        record_id: str,
        user: Dict = Depends(require_capability(delete_capability or write_capability)),
        resource: Resource = Depends(get_resource)
    ):
        resource.remove(record_id).unwrap()
        return None

    return router

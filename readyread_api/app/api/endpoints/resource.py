"""
Generic CRUD routes for a catalog resource.

``build_resource_router`` produces the routes shared by authors,
genres and languages:

* ``GET    /{id}``  fetch one (200)
* ``POST   /``      create (201 + record)
* ``PUT    /{id}``  full replace (200, empty body)
* ``PATCH  /{id}``  partial update (200, empty body), only when a
  partial DTO is given
* ``DELETE /{id}``  remove (200, empty body)

Ids come from the path only.  Errors raised by the service are turned
into responses by the handlers in ``core.errors``.
"""

import logging
from typing import Annotated, Optional, Type

from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import BaseModel

from ...services import ResourceService
from ..deps import service_dependency

# Largest path id accepted for 64-bit and 16-bit resource ids.
BIGINT_ID_MAX = 2**63 - 1
SMALLINT_ID_MAX = 2**16 - 1


def build_resource_router(
    *,
    resource: str,
    name: str,
    record: Type[BaseModel],
    create_dto: Type[BaseModel],
    update_dto: Type[BaseModel],
    partial_dto: Optional[Type[BaseModel]] = None,
    max_id: int = BIGINT_ID_MAX,
) -> APIRouter:
    """Build the router for one resource.

    Parameters
    ----------
    resource : str
        Plural resource name; the key of the service on
        ``app.state.services`` (e.g. ``"authors"``).
    name : str
        Singular name used in route names and logs (e.g. ``"author"``).
    record, create_dto, update_dto, partial_dto
        Response schema and request DTOs.  No PATCH route is added when
        ``partial_dto`` is ``None``.
    max_id : int
        Largest id accepted in the path.
    """
    logger = logging.getLogger(__name__)
    router = APIRouter()
    RecordId = Annotated[int, Path(ge=0, le=max_id, description=f"{name.capitalize()} id")]
    Service = Annotated[ResourceService, Depends(service_dependency(resource))]

    @router.get("/{record_id}", response_model=record, name=f"get_{name}")
    def get_record(record_id: RecordId, service: Service):
        logger.info("get %s", name)
        return service.get_by_id(record_id)

    @router.post("", response_model=record, status_code=status.HTTP_201_CREATED, name=f"create_{name}")
    def create_record(payload: create_dto, service: Service):
        logger.info("create %s", name)
        return service.create(payload)

    @router.put("/{record_id}", response_class=Response, name=f"update_{name}")
    def update_record(record_id: RecordId, payload: update_dto, service: Service) -> Response:
        logger.info("update %s", name)
        service.update(record_id, payload)
        return Response(status_code=status.HTTP_200_OK)

    if partial_dto is not None:

        @router.patch("/{record_id}", response_class=Response, name=f"update_{name}_partially")
        def update_record_partially(record_id: RecordId, payload: partial_dto, service: Service) -> Response:
            logger.info("update %s partially", name)
            service.update_partially(record_id, payload)
            return Response(status_code=status.HTTP_200_OK)

    @router.delete("/{record_id}", response_class=Response, name=f"delete_{name}")
    def delete_record(record_id: RecordId, service: Service) -> Response:
        logger.info("delete %s", name)
        service.delete(record_id)
        return Response(status_code=status.HTTP_200_OK)

    return router

"""Author endpoints: ``/api/authors``."""

from ...schemas.author import Author, CreateAuthorDTO, UpdateAuthorDTO, UpdateAuthorPartiallyDTO
from .resource import BIGINT_ID_MAX, build_resource_router

router = build_resource_router(
    resource="authors",
    name="author",
    record=Author,
    create_dto=CreateAuthorDTO,
    update_dto=UpdateAuthorDTO,
    partial_dto=UpdateAuthorPartiallyDTO,
    max_id=BIGINT_ID_MAX,
)

"""Language endpoints: ``/api/languages``.  Languages have no PATCH route."""

from ...schemas.language import CreateLanguageDTO, Language, UpdateLanguageDTO
from .resource import SMALLINT_ID_MAX, build_resource_router

router = build_resource_router(
    resource="languages",
    name="language",
    record=Language,
    create_dto=CreateLanguageDTO,
    update_dto=UpdateLanguageDTO,
    max_id=SMALLINT_ID_MAX,
)

"""Genre endpoints: ``/api/genres``.  Genres have no PATCH route."""

from ...schemas.genre import CreateGenreDTO, Genre, UpdateGenreDTO
from .resource import SMALLINT_ID_MAX, build_resource_router

router = build_resource_router(
    resource="genres",
    name="genre",
    record=Genre,
    create_dto=CreateGenreDTO,
    update_dto=UpdateGenreDTO,
    max_id=SMALLINT_ID_MAX,
)

from __future__ import annotations

import logging

from studyhub.models.resource import Resource
from studyhub.repositories.resource import ResourceRepository
from studyhub.services._shared.base import BaseService
from studyhub.services._shared.errors import NotFoundError, ValidationError

from ._converters import resource_to_out
from .dto import ResourceCreateIn, ResourceOut, ResourceUpdateIn

logger = logging.getLogger(__name__)


class ResourceCommandService(BaseService):
    """Write side of resources: create, update and delete.

    A user's resources are found by querying ``Resource.owner_id``; nothing
    is appended to or pulled from the user row, so every command is a
    single write.
    """

    def create(self, dto: ResourceCreateIn) -> ResourceOut:
        owner_id = self.ensure_actor()
        with self.rw_uow() as uow:
            repo: ResourceRepository = uow.resources
            try:
                resource = Resource(
                    title=dto.title.strip(),
                    description=dto.description.strip(),
                    semester=dto.semester,
                    branch=dto.branch,
                    url=dto.url,
                    file_size=dto.file_size,
                    owner_id=owner_id,
                )
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            repo.add(resource)
            logger.info("Resource created", extra={"resource_id": resource.id, "user_id": owner_id})
            return resource_to_out(resource)

    def update(self, dto: ResourceUpdateIn) -> ResourceOut:
        """Change title and description. Owner or admin only."""
        with self.rw_uow() as uow:
            repo: ResourceRepository = uow.resources
            resource = repo.get_visible(dto.resource_id, for_update=True)
            if resource is None:
                raise NotFoundError("Resource", dto.resource_id)
            self.ensure_can_manage(resource.owner_id)

            repo.update(resource, title=dto.title.strip(), description=dto.description.strip())
            average, total = uow.ratings.stats(resource.id)
            logger.info("Resource updated", extra={"resource_id": resource.id})
            return resource_to_out(
                resource,
                average_rating=average if total else None,
                total_ratings=total,
            )

    def delete(self, resource_id: int) -> None:
        """Delete a resource with its ratings and comments. Owner or admin only."""
        with self.rw_uow() as uow:
            repo: ResourceRepository = uow.resources
            resource = repo.get_visible(resource_id, for_update=True)
            if resource is None:
                raise NotFoundError("Resource", resource_id)
            self.ensure_can_manage(resource.owner_id)
            repo.delete(resource)
            logger.info("Resource deleted", extra={"resource_id": resource_id})

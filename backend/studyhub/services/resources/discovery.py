"""
ResourceDiscoveryService
========================

Read side of resources: the aggregation pipeline

    match (filter, not blocked) → sort (newest first) → left join owner
    → flatten/project (no secret user columns) → paginate

runs as a single SELECT in :meth:`ResourceRepository.search`, with the
per-resource rating statistics joined in from a grouped subquery.
"""

from __future__ import annotations

import logging

from studyhub.repositories.resource import ResourceRepository
from studyhub.services._shared.base import BaseService
from studyhub.services._shared.dto import PageMeta
from studyhub.services._shared.errors import NotFoundError

from ._converters import row_to_out
from .dto import ResourceFilter, ResourceListOut, ResourceOut

logger = logging.getLogger(__name__)

NO_RESULTS = "No resources found with the given filters or search criteria"


class ResourceDiscoveryService(BaseService):
    """Read-only resource listing and single fetch."""

    def list(self, flt: ResourceFilter) -> ResourceListOut:
        """
        Execute the discovery pipeline for ``flt``.

        :raises NotFoundError: When nothing matches the filter.
        """
        with self.ro_uow() as uow:
            repo: ResourceRepository = uow.resources
            page = repo.search(
                semester=flt.semester,
                branch=flt.branch,
                search_text=flt.search_text,
                page=flt.page,
                limit=flt.limit,
            )
            logger.info(
                "Resources listed",
                extra={"page": page.page, "limit": page.limit, "total": page.total},
            )
            if page.total == 0:
                raise NotFoundError("Resource", detail=NO_RESULTS)

            return ResourceListOut(
                items=[row_to_out(row) for row in page.items],
                meta=PageMeta.build(total=page.total, page=page.page, limit=page.limit),
            )

    def get(self, resource_id: int) -> ResourceOut:
        """
        Fetch one visible resource with owner and rating statistics.

        :raises NotFoundError: When missing or blocked.
        """
        with self.ro_uow() as uow:
            row = uow.resources.get_projection(resource_id)
            if row is None:
                raise NotFoundError("Resource", resource_id)
            return row_to_out(row)

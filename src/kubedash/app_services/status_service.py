"""Status application service."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from ..kube.pods import ServiceStatus, query_service
from ..util.log import Log

if TYPE_CHECKING:
    from ..runtime import AppContext

log = Log.create({"service": "status"})


class StatusService:
    """Aggregates per-service pod health into one snapshot."""

    @classmethod
    async def query(cls, app: AppContext, name: str) -> ServiceStatus:
        try:
            return await query_service(app.kubectl, name)
        except Exception as e:
            log.error("status query raised", {"name": name, "error": e})
            return ServiceStatus.failed(name, e)

    @classmethod
    async def snapshot(cls, app: AppContext) -> dict[str, Any]:
        """Query every configured service concurrently.

        The result always holds one record per configured service, keyed by
        name in configuration order.
        """
        names = app.services
        results = await asyncio.gather(*(cls.query(app, name) for name in names))
        return {
            "services": {name: status.wire() for name, status in zip(names, results)},
            "urls": app.config.service_urls(),
        }

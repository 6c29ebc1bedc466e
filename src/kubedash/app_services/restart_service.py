"""Restart application service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..util.log import Log

if TYPE_CHECKING:
    from ..runtime import AppContext

log = Log.create({"service": "restart"})


class RestartService:
    """Triggers rollout restarts; failures propagate to the caller."""

    @classmethod
    async def restart(cls, app: AppContext, service: str) -> dict[str, Any]:
        await app.kubectl.run("rollout", "restart", "deployment", "-l", f"app={service}")
        log.info("rollout restart requested", {"service": service, "namespace": app.config.namespace})
        return {"success": True, "message": f"Restarting {service}..."}

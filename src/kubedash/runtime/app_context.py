"""Application runtime context and lifecycle container."""

from __future__ import annotations

from ..core.config import DashboardConfig
from ..kube.kubectl import Kubectl
from ..logs.stream import LogStreamManager
from ..util.log import Log

log = Log.create({"service": "runtime"})


class AppContext:
    """Application-level service container.

    Created once per process (web server or CLI run) from the loaded
    configuration and threaded through every service call; components never
    read configuration from the environment themselves.
    """

    __slots__ = ("config", "kubectl", "streams", "started")

    def __init__(self, config: DashboardConfig, kubectl: Kubectl | None = None) -> None:
        self.config = config
        self.kubectl = kubectl or Kubectl(binary=config.kubectl, namespace=config.namespace)
        self.streams = LogStreamManager(self.kubectl)
        self.started = False

    @property
    def services(self) -> list[str]:
        return list(self.config.services)

    async def startup(self) -> None:
        if self.started:
            return
        log.info(
            "runtime started",
            {"namespace": self.config.namespace, "services": self.config.services, "kubectl": self.config.kubectl},
        )
        self.started = True

    async def shutdown(self) -> None:
        await self.streams.close_all()
        self.started = False
        log.info("runtime stopped")

"""Shared test helpers."""

from __future__ import annotations

import json
import stat
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Union

from kubedash.core.config import DashboardConfig
from kubedash.kube.kubectl import CommandResult, KubectlError
from kubedash.runtime import AppContext

Reply = Union[str, Exception, Callable[[tuple[str, ...]], str]]


class FakeKubectl:
    """In-memory kubectl: replies are looked up by argv prefix.

    ``replies`` maps an argument tuple prefix (namespace flags excluded) to
    stdout text, an exception to raise, or a callable producing stdout.
    The longest matching prefix wins; unmatched calls raise ``KubectlError``.
    """

    def __init__(self, replies: dict[tuple[str, ...], Reply] | None = None, namespace: str = "test-ns") -> None:
        self.replies = dict(replies or {})
        self.namespace = namespace
        self.calls: list[tuple[str, ...]] = []
        self.follow_calls: list[tuple[str, ...]] = []
        self.merged: list[bool] = []

    def argv(self, *args: str) -> list[str]:
        return ["kubectl", "-n", self.namespace, *args]

    async def run(self, *args: str, merge_stderr: bool = False) -> CommandResult:
        self.calls.append(args)
        self.merged.append(merge_stderr)
        matches = [key for key in self.replies if args[: len(key)] == key]
        if not matches:
            raise KubectlError(self.argv(*args), f"no fake reply for {' '.join(args)}", 1)
        reply = self.replies[max(matches, key=len)]
        if isinstance(reply, Exception):
            raise reply
        stdout = reply(args) if callable(reply) else reply
        return CommandResult(args=self.argv(*args), returncode=0, stdout=stdout, stderr="")

    @asynccontextmanager
    async def follow(self, *args: str) -> AsyncIterator[Any]:
        self.follow_calls.append(args)
        raise KubectlError(self.argv(*args), "follow is not supported by FakeKubectl", 1)
        yield  # pragma: no cover


def config(**overrides: Any) -> DashboardConfig:
    data: dict[str, Any] = {"namespace": "test-ns"}
    data.update(overrides)
    return DashboardConfig.model_validate(data)


def make_ctx(kubectl: Any = None, **overrides: Any) -> AppContext:
    """AppContext over a fake (or real) kubectl."""
    return AppContext(config(**overrides), kubectl=kubectl if kubectl is not None else FakeKubectl())


def write_fake_kubectl(directory: Path, body: str) -> str:
    """Executable shell script standing in for the kubectl binary."""
    path = directory / "kubectl"
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


def pod(
    name: str,
    *,
    phase: str = "Running",
    ready: bool | None = True,
    start: str | None = "2024-01-01T00:00:00Z",
) -> dict[str, Any]:
    status: dict[str, Any] = {"phase": phase}
    if ready is not None:
        status["conditions"] = [
            {"type": "PodScheduled", "status": "True"},
            {"type": "Ready", "status": "True" if ready else "False"},
        ]
    if start is not None:
        status["startTime"] = start
    return {"metadata": {"name": name}, "status": status}


def pod_list(*pods: dict[str, Any]) -> str:
    return json.dumps({"apiVersion": "v1", "kind": "List", "items": list(pods)})


TOP_OUTPUT = "NAME                       CPU(cores)   MEMORY(bytes)\nbackend-7d9f8-abcde        12m          64Mi\n"

import json

import pytest

from kubedash.kube.kubectl import KubectlError
from kubedash.kube.pods import query_service
from tests.helpers import TOP_OUTPUT, FakeKubectl, pod, pod_list


@pytest.mark.anyio
async def test_query_service_without_pods_is_not_found() -> None:
    kubectl = FakeKubectl({("get", "pods"): pod_list()})

    result = await query_service(kubectl, "postgres")

    assert result.wire() == {"name": "postgres", "status": "NotFound", "ready": False}
    assert kubectl.calls == [("get", "pods", "-l", "app=postgres", "-o", "json")]


@pytest.mark.anyio
async def test_query_service_reads_pod_and_usage() -> None:
    kubectl = FakeKubectl(
        {
            ("get", "pods"): pod_list(pod("backend-7d9f8-abcde")),
            ("top", "pod"): TOP_OUTPUT,
        }
    )

    result = await query_service(kubectl, "backend")

    assert result.status == "Running"
    assert result.ready is True
    assert result.cpu == "12m"
    assert result.memory == "64Mi"
    assert result.pod_name == "backend-7d9f8-abcde"
    assert result.uptime and result.uptime != "N/A"
    assert ("top", "pod", "backend-7d9f8-abcde") in kubectl.calls


@pytest.mark.anyio
async def test_metrics_failure_degrades_to_not_available() -> None:
    kubectl = FakeKubectl(
        {
            ("get", "pods"): pod_list(pod("backend-1")),
            ("top", "pod"): KubectlError(["kubectl", "top"], "Metrics API not available", 1),
        }
    )

    result = await query_service(kubectl, "backend")

    assert result.status == "Running"
    assert result.error is None
    assert result.cpu == "N/A"
    assert result.memory == "N/A"


@pytest.mark.anyio
async def test_failed_pod_query_becomes_error_record() -> None:
    kubectl = FakeKubectl({("get", "pods"): KubectlError(["kubectl"], "connection refused", 1)})

    result = await query_service(kubectl, "redis")

    assert result.wire() == {"name": "redis", "status": "Error", "error": "connection refused"}


@pytest.mark.anyio
async def test_malformed_pod_listing_becomes_error_record() -> None:
    kubectl = FakeKubectl({("get", "pods"): "not json"})

    result = await query_service(kubectl, "redis")

    assert result.status == "Error"
    assert result.error
    assert result.ready is None


@pytest.mark.anyio
async def test_query_service_uses_newest_pod() -> None:
    listing = pod_list(
        pod("frontend-old", start="2024-01-01T00:00:00Z"),
        pod("frontend-new", phase="Pending", ready=False, start="2024-02-01T00:00:00Z"),
    )
    kubectl = FakeKubectl({("get", "pods"): listing, ("top", "pod"): TOP_OUTPUT})

    result = await query_service(kubectl, "frontend")

    assert result.pod_name == "frontend-new"
    assert result.status == "Pending"


@pytest.mark.anyio
async def test_listing_without_items_key_is_not_found() -> None:
    kubectl = FakeKubectl({("get", "pods"): json.dumps({"kind": "List"})})

    result = await query_service(kubectl, "redis")

    assert result.status == "NotFound"

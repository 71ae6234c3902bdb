"""Shared fixtures for admission-controller tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from admission_controller.review.models import AdmissionRequest

ReviewFactory = Callable[..., dict[str, Any]]
PodFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def make_review() -> ReviewFactory:
    """Factory for AdmissionReview wire dicts."""

    def _make(
        operation: str = "CREATE",
        obj: Any = None,
        old_obj: Any = None,
        uid: str = "705ab4f5-6393-11e8-b7cc-42010a800002",
        api_version: str = "admission.k8s.io/v1",
        kind: str = "Pod",
        namespace: str | None = "default",
        name: str | None = "test",
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "uid": uid,
            "kind": {"group": "", "version": "v1", "kind": kind},
            "resource": {"group": "", "version": "v1", "resource": kind.lower() + "s"},
            "namespace": namespace,
            "name": name,
            "operation": operation,
            "userInfo": {"username": "admin", "groups": ["system:masters"]},
        }
        if obj is not None:
            request["object"] = obj
        if old_obj is not None:
            request["oldObject"] = old_obj
        return {"apiVersion": api_version, "kind": "AdmissionReview", "request": request}

    return _make


@pytest.fixture
def make_pod() -> PodFactory:
    """Factory for pod objects as embedded in an admission request."""

    def _make(
        namespace: str = "default",
        images: tuple[str, ...] = ("nginx:1.25",),
        annotations: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {"name": "test", "namespace": namespace}
        if annotations is not None:
            metadata["annotations"] = annotations
        return {
            "apiVersion": "v1",
            "kind": "Pod",
            "metadata": metadata,
            "spec": {
                "containers": [
                    {"name": f"c{i}", "image": image, "ports": [{"containerPort": 80}]}
                    for i, image in enumerate(images)
                ]
            },
        }

    return _make


@pytest.fixture
def make_request() -> Callable[..., AdmissionRequest]:
    """Factory for decoded AdmissionRequest instances."""

    def _make(operation: str = "CREATE", obj: Any = None, old_obj: Any = None, uid: str = "uid-1") -> AdmissionRequest:
        return AdmissionRequest(uid=uid, operation=operation, object_=obj, old_object=old_obj)

    return _make

"""Tests for the bundled pod policies."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from admission_controller.hook import Operation
from admission_controller.policies import pods
from admission_controller.review.models import AdmissionRequest

RequestFactory = Callable[..., AdmissionRequest]
PodFactory = Callable[..., dict[str, Any]]


class TestValidateCreate:
    """Tests for pods.validate_create()."""

    def test_latest_image_is_denied(self, make_request: RequestFactory, make_pod: PodFactory) -> None:
        """Any container on :latest denies the pod."""
        result = pods.validate_create(make_request(obj=make_pod(images=("app:2", "sidecar:latest"))))

        assert result.allowed is False
        assert result.message == "You cannot use the tag 'latest' in a container."

    def test_untagged_image_is_allowed(self, make_request: RequestFactory, make_pod: PodFactory) -> None:
        """Only an explicit :latest suffix is rejected."""
        result = pods.validate_create(make_request(obj=make_pod(images=("nginx", "registry:5000/app:1"))))

        assert result.allowed is True

    def test_missing_object_is_denied(self, make_request: RequestFactory) -> None:
        """CREATE without an object is a denial, not an exception."""
        result = pods.validate_create(make_request(obj=None))

        assert result.allowed is False
        assert result.message == "request has no object to evaluate"

    def test_malformed_pod_is_denied(self, make_request: RequestFactory) -> None:
        """Objects that do not match the pod shape are denied with the field."""
        result = pods.validate_create(make_request(obj={"spec": {"containers": "nope"}}))

        assert result.allowed is False
        assert result.message.startswith("invalid Pod in object: spec.containers")


class TestMutateCreate:
    """Tests for pods.mutate_create()."""

    def test_special_namespace_appends_sidecar(self, make_request: RequestFactory, make_pod: PodFactory) -> None:
        """The replacement container list keeps the originals and appends the sidecar."""
        result = pods.mutate_create(make_request(obj=make_pod(namespace="special", images=("a:1", "b:2"))))

        assert result.allowed is True
        replace, add = result.patch_ops
        assert replace.op == "replace"
        assert replace.path == "/spec/containers"
        assert [c["image"] for c in replace.value] == ["a:1", "b:2", "busybox:stable"]
        assert replace.value[0]["ports"] == [{"containerPort": 80}]
        assert replace.value[-1] == {
            "name": "test-sidecar",
            "image": "busybox:stable",
            "command": pods.SIDECAR_CONTAINER.command,
        }
        assert add.op == "add"
        assert add.path == "/metadata/annotations"
        assert add.value == {"origin": "fromMutation"}

    def test_original_containers_are_reemitted_verbatim(self, make_request: RequestFactory, make_pod: PodFactory) -> None:
        """Fields the orchestrator sent, explicit nulls included, survive the replace."""
        pod = make_pod(namespace="special")
        pod["spec"]["containers"][0].update({"workingDir": None, "args": None, "resources": {}})
        original = [dict(c) for c in pod["spec"]["containers"]]

        result = pods.mutate_create(make_request(obj=pod))

        replace = result.patch_ops[0]
        assert replace.value[:-1] == original
        assert replace.value[-1]["name"] == "test-sidecar"

    def test_other_namespace_gets_annotation_only(self, make_request: RequestFactory, make_pod: PodFactory) -> None:
        """No sidecar outside the special namespace."""
        result = pods.mutate_create(make_request(obj=make_pod(namespace="default")))

        assert [(op.op, op.path) for op in result.patch_ops] == [("add", "/metadata/annotations")]

    def test_missing_object_is_denied(self, make_request: RequestFactory) -> None:
        """Nothing to mutate is a denial without patches."""
        result = pods.mutate_create(make_request(obj=None))

        assert result.allowed is False
        assert result.patch_ops == ()


class TestHooks:
    """Hook wiring for the pod policies."""

    def test_validation_hook_registers_create_only(self) -> None:
        assert pods.new_validation_hook().registered_operations() == (Operation.CREATE,)

    def test_mutation_hook_registers_create_only(self) -> None:
        assert pods.new_mutation_hook().registered_operations() == (Operation.CREATE,)

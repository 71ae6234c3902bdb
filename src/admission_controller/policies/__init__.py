"""Bundled example policies.

These decision functions are collaborators of the hook core, wired to the
default routes by default_routes():

    /validate/pods         pods.new_validation_hook()
    /mutate/pods           pods.new_mutation_hook()
    /validate/deployments  deployments.new_validation_hook()
"""

from __future__ import annotations

__all__ = ["default_routes"]

from admission_controller.constants import (
    MUTATE_PODS_PATH,
    VALIDATE_DEPLOYMENTS_PATH,
    VALIDATE_PODS_PATH,
)
from admission_controller.hook import Hook
from admission_controller.policies import deployments, pods


def default_routes() -> dict[str, Hook]:
    """Map each webhook path to a freshly built Hook."""
    return {
        VALIDATE_PODS_PATH: pods.new_validation_hook(),
        MUTATE_PODS_PATH: pods.new_mutation_hook(),
        VALIDATE_DEPLOYMENTS_PATH: deployments.new_validation_hook(),
    }

"""Operation hooks - the admission decision core.

Routes each admission request to the decision function registered for its
operation and describes the outcome:

- operation.py: Operation enum (CREATE/UPDATE/DELETE/CONNECT)
- patch.py: PatchOperation model and add/replace/remove constructors
- result.py: Result (allowed, message, patch_ops)
- protocol.py: AdmitFunc / AdmissionPolicy protocols for decision functions
- hook.py: Hook with one optional slot per operation

The hook layer is stateless and never touches the wire format.
Envelope translation is in review/.
"""

from admission_controller.hook.hook import Hook
from admission_controller.hook.operation import Operation
from admission_controller.hook.patch import (
    PatchOperation,
    add_patch_operation,
    remove_patch_operation,
    replace_patch_operation,
)
from admission_controller.hook.protocol import AdmissionPolicy, AdmitFunc, DecisionFunction
from admission_controller.hook.result import Result

__all__ = [
    # Dispatch
    "Hook",
    "Operation",
    # Decision functions
    "AdmissionPolicy",
    "AdmitFunc",
    "DecisionFunction",
    # Results
    "Result",
    "PatchOperation",
    "add_patch_operation",
    "remove_patch_operation",
    "replace_patch_operation",
]

from __future__ import annotations

from typing import List, Optional

from operations import ALL_OPERATIONS
from tmplkit.contract_store import ContractStore
from tmplkit.core.binder import bind_all
from tmplkit.core.errors import ValidationError
from tmplkit.core.execution_context import ExecutionContext
from tmplkit.core.operation import OperationDescriptor, operation_classes_descriptors
from tmplkit.registry.operation_registry import OperationRegistry


DESCRIPTOR_SCHEMA = "operation_descriptor.schema.json"


def build_operation_registry(context: ExecutionContext, *, store: Optional[ContractStore] = None) -> OperationRegistry:
    """
    Bind and register the built-in operations shipped with tmplkit, then freeze.
    """
    store = store or ContractStore().load()
    reg = OperationRegistry()
    for op in bind_all(ALL_OPERATIONS, context):
        errs = store.validate(DESCRIPTOR_SCHEMA, op.descriptor.to_dict())
        if errs:
            raise ValidationError(
                code="contract.invalid",
                message=f"Descriptor for {op.name} does not match {DESCRIPTOR_SCHEMA}",
                data={"operation": op.name, "errors": errs},
            )
        reg.register(op)
    return reg.freeze()


def list_descriptors() -> List[OperationDescriptor]:
    # Class attributes only; nothing is bound or run.
    return operation_classes_descriptors(ALL_OPERATIONS)

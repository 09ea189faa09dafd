"""FastAPI endpoints for evaluating catalog operations.

Routes
------
GET    /operations                 List catalog operations
GET    /operations/{name}          Describe one operation
POST   /operations/{name}/invoke   Call an operation with zero or more args
POST   /bindings/supply            Feed more args to a returned binding

The service is stateless: a partial result is returned to the client as
a binding, and the client sends it back to continue.  Evaluations that
would exceed the work limits in models.py are refused with 422.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from catalog import Catalog
from errors import DivisionByZeroError, NumericError
from models import (
    EvaluationResponse,
    InvokeRequest,
    OperationInfo,
    SupplyRequest,
    WorkLimitError,
    check_work,
    decode_slot,
)
from partial import OMITTED, OperationDescriptor, PartialBinding, bind, fill, reduce_if_complete

logger = logging.getLogger(__name__)

router = APIRouter(tags=["operations"])

# The catalog instance is injected by the app factory (see app.py).
_catalog: Catalog | None = None


def set_catalog(catalog: Catalog) -> None:
    """Inject the catalog instance. Called once at app startup."""
    global _catalog
    _catalog = catalog


def get_catalog() -> Catalog:
    assert _catalog is not None, "Catalog not initialized"
    return _catalog


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def _info(op: OperationDescriptor) -> OperationInfo:
    return OperationInfo(
        name=op.name,
        arity=op.arity,
        binds_second_slot_when_single_argument=op.binds_second_slot_when_single_argument,
        description=op.description,
    )


def _lookup(name: str) -> OperationDescriptor:
    catalog = get_catalog()
    if name not in catalog:
        raise HTTPException(status_code=404, detail=f"Operation not found: {name}")
    return catalog.get(name)


def _numeric_error(e: NumericError) -> HTTPException:
    logger.info("Rejected evaluation: %s", e)
    if isinstance(e, DivisionByZeroError):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


def _work_limit_error(e: WorkLimitError) -> HTTPException:
    logger.warning("Refused expensive evaluation: %s", e)
    return HTTPException(status_code=422, detail=str(e))


def _evaluate(binding: PartialBinding) -> EvaluationResponse:
    try:
        check_work(binding)
    except WorkLimitError as e:
        raise _work_limit_error(e) from e
    return EvaluationResponse.from_result(reduce_if_complete(binding))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/operations", response_model=list[OperationInfo])
def list_operations() -> list[OperationInfo]:
    """List every catalog operation in declaration order."""
    return [_info(op) for op in get_catalog()]


@router.get("/operations/{name}", response_model=OperationInfo)
def get_operation(name: str) -> OperationInfo:
    return _info(_lookup(name))


@router.post("/operations/{name}/invoke", response_model=EvaluationResponse)
def invoke_operation(name: str, payload: InvokeRequest) -> EvaluationResponse:
    """Call an operation; fewer args than its arity yield a binding."""
    op = _lookup(name)
    try:
        return _evaluate(bind(op, [decode_slot(v) for v in payload.args]))
    except NumericError as e:
        raise _numeric_error(e) from e


@router.post("/bindings/supply", response_model=EvaluationResponse)
def supply_binding(payload: SupplyRequest) -> EvaluationResponse:
    """Fill the open slots of a binding returned by an earlier call."""
    op = _lookup(payload.binding.operation)
    try:
        slots = [decode_slot(v) for v in payload.binding.slots]
        slots += [OMITTED] * (op.arity - len(slots))
        binding = PartialBinding(op, tuple(slots))
        return _evaluate(fill(binding, [decode_slot(v) for v in payload.args]))
    except NumericError as e:
        raise _numeric_error(e) from e

from __future__ import annotations

import math
import uuid
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..config import settings
from ..core.swap import Asset, SwapFormController
from ..services.prices import PriceService, get_price_service


router = APIRouter(prefix="/swap")

# Process-local sessions, oldest first; each one owns its own form and ledger.
# Capped at settings.max_swap_sessions, so clients should DELETE finished sessions.
_SESSIONS: Dict[str, SwapFormController] = {}


class AssetSelection(BaseModel):
    symbol: Optional[str] = Field(default=None, description="Catalog symbol, or null to clear the selection")


class AmountEdit(BaseModel):
    text: str = Field(default="", description="Full contents of the amount field after the keystroke")


class BalanceOverride(BaseModel):
    balances: Optional[Dict[str, float]] = Field(
        default=None,
        description="Starting balances for the session (defaults to the seed ledger)",
    )


def _payload(session_id: str, controller: SwapFormController) -> Dict[str, Any]:
    return {"sessionId": session_id, **controller.view().to_dict()}


def _get_session(session_id: str) -> SwapFormController:
    controller = _SESSIONS.get(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail=f"Unknown swap session: {session_id}")
    return controller


def _resolve_asset(controller: SwapFormController, selection: AssetSelection) -> Optional[Asset]:
    if selection.symbol is None:
        return None
    asset = controller.find_asset(selection.symbol)
    if asset is None:
        raise HTTPException(status_code=404, detail=f"Unknown asset: {selection.symbol}")
    return asset


@router.post("/sessions")
async def create_session(
    req: Optional[BalanceOverride] = None,
    prices: PriceService = Depends(get_price_service),
) -> Dict[str, Any]:
    balances = req.balances if req else None
    if balances and any(not math.isfinite(value) or value < 0 for value in balances.values()):
        raise HTTPException(status_code=400, detail="Balances must be finite and non-negative")

    controller = SwapFormController(prices, initial_balances=balances)
    await controller.load_catalog()

    while len(_SESSIONS) >= settings.max_swap_sessions:
        _SESSIONS.pop(next(iter(_SESSIONS)))

    session_id = uuid.uuid4().hex
    _SESSIONS[session_id] = controller
    return _payload(session_id, controller)


@router.get("/sessions/{session_id}")
async def get_session(session_id: str) -> Dict[str, Any]:
    return _payload(session_id, _get_session(session_id))


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str) -> Dict[str, Any]:
    _get_session(session_id)
    del _SESSIONS[session_id]
    return {"sessionId": session_id, "deleted": True}


@router.post("/sessions/{session_id}/source")
async def select_source(session_id: str, req: AssetSelection) -> Dict[str, Any]:
    controller = _get_session(session_id)
    controller.select_source_asset(_resolve_asset(controller, req))
    return _payload(session_id, controller)


@router.post("/sessions/{session_id}/destination")
async def select_destination(session_id: str, req: AssetSelection) -> Dict[str, Any]:
    controller = _get_session(session_id)
    controller.select_destination_asset(_resolve_asset(controller, req))
    return _payload(session_id, controller)


@router.post("/sessions/{session_id}/amount")
async def edit_amount(session_id: str, req: AmountEdit) -> Dict[str, Any]:
    controller = _get_session(session_id)
    if not controller.edit_source_amount(req.text):
        raise HTTPException(status_code=422, detail=f"Rejected amount input: {req.text!r}")
    return _payload(session_id, controller)


@router.post("/sessions/{session_id}/flip")
async def flip(session_id: str) -> Dict[str, Any]:
    controller = _get_session(session_id)
    controller.flip_direction()
    return _payload(session_id, controller)


@router.post("/sessions/{session_id}/max")
async def max_amount(session_id: str) -> Dict[str, Any]:
    controller = _get_session(session_id)
    controller.set_max_source_amount()
    return _payload(session_id, controller)


@router.post("/sessions/{session_id}/submit")
async def submit(session_id: str) -> Dict[str, Any]:
    controller = _get_session(session_id)
    confirmation = controller.submit()
    return {**_payload(session_id, controller), "submitted": confirmation is not None}


@router.post("/sessions/{session_id}/dismiss")
async def dismiss(session_id: str) -> Dict[str, Any]:
    controller = _get_session(session_id)
    controller.dismiss_confirmation()
    return _payload(session_id, controller)

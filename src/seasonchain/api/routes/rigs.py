# File: src/seasonchain/api/routes/rigs.py
from typing import List

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from ..dependencies import get_node
from ..models import (
    BuyRigRequest,
    LeaderboardEntry,
    PurchaseReceipt,
    RepairReceipt,
    RepairRigRequest,
    Rig,
    RigTier,
    User,
)
from ...exceptions import LedgerError, RigNotFoundError
from ...node import SeasonNode

router = APIRouter(prefix="/api/v1")

DEFAULT_SESSION = "demo-user"

def _current_reward(node: SeasonNode) -> float:
    """Reward that rig prices are pegged to.

    Once the season ends telemetry reports a reward of 0, but prices stay at
    the final epoch's reward so rigs never become free.
    """
    return node.schedule.current_reward(node.chain_state.height)

@router.get("/rigs/tiers", response_model=List[RigTier])
def get_rig_tiers(node: SeasonNode = Depends(get_node)):
    return [RigTier(**tier.to_dict()) for tier in node.ledger.rig_tiers(_current_reward(node))]

@router.post("/rigs/buy", response_model=PurchaseReceipt)
def buy_rig(
    request: BuyRigRequest,
    x_session_id: str = Header(DEFAULT_SESSION),
    node: SeasonNode = Depends(get_node)
):
    now = node.clock.game_time()
    try:
        rig = node.ledger.buy_rig(
            x_session_id,
            request.tier_id,
            _current_reward(node),
            now,
            idempotency_key=request.idempotency_key
        )
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    participant = node.ledger.get_participant(x_session_id)
    return PurchaseReceipt(
        rig=Rig(**rig.to_dict(now)),
        new_balance=participant.balance,
        global_burned=node.ledger.global_burned,
        circulating_supply=node.ledger.circulating_supply
    )

@router.post("/rigs/repair", response_model=RepairReceipt)
def repair_rig(
    request: RepairRigRequest,
    x_session_id: str = Header(DEFAULT_SESSION),
    node: SeasonNode = Depends(get_node)
):
    now = node.clock.game_time()
    try:
        cost = node.ledger.repair_rig(x_session_id, request.rig_id, now)
        rig = node.ledger.find_rig(x_session_id, request.rig_id)
    except RigNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    participant = node.ledger.get_participant(x_session_id)
    return RepairReceipt(
        rig=Rig(**rig.to_dict(now)),
        repair_cost=cost,
        new_balance=participant.balance,
        global_burned=node.ledger.global_burned,
        circulating_supply=node.ledger.circulating_supply
    )

@router.get("/user", response_model=User)
def get_user(
    x_session_id: str = Header(DEFAULT_SESSION),
    node: SeasonNode = Depends(get_node)
):
    now = node.clock.game_time()
    participant = node.ledger.get_participant(x_session_id, now)
    return User(**participant.to_dict(now))

@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(
    limit: int = Query(10, ge=1, le=100),
    node: SeasonNode = Depends(get_node)
):
    now = node.clock.game_time()
    return [LeaderboardEntry(**entry) for entry in node.ledger.leaderboard(limit, now)]

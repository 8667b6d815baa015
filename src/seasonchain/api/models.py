# File: src/seasonchain/api/models.py
from pydantic import BaseModel
from typing import List, Optional

class Transaction(BaseModel):
    id: str
    amount: float
    fee: float
    sender: str
    recipient: str

class Block(BaseModel):
    height: int
    timestamp: float
    hash: str
    previous_hash: str
    difficulty: float
    subsidy: float
    total_fees: float
    reward: float
    tx_count: int
    is_orphan: bool
    work_target: str
    transactions: List[Transaction]

class BlockPage(BaseModel):
    blocks: List[Block]
    next_cursor: Optional[int] = None
    has_more: bool

class EmissionTelemetry(BaseModel):
    height: int
    current_reward: float
    emitted_total: float
    remaining: float
    blocks_remaining: int
    next_halving_in: Optional[int] = None
    epoch_index: int
    epoch_length: int
    last_epoch_length: int
    total_blocks: int
    halving_heights: List[int]
    r0: float
    halving_epochs: int
    total_emission: float

class Telemetry(BaseModel):
    height: int
    timestamp: float
    game_time: float
    difficulty: float
    network_weight: float
    avg_block_time: float
    current_reward: float
    next_halving_height: Optional[int] = None
    next_halving_in: Optional[int] = None
    blocks_until_retarget: int
    buffered_blocks: int
    blocks_remaining: int
    emitted_total: float
    remaining: float
    total_emission: float
    epoch_index: int
    halving_epochs: int
    global_burned: float
    circulating_supply: float
    season_ended: bool
    emissions: EmissionTelemetry
    your_weight: Optional[float] = None

class EmissionsPreview(BaseModel):
    total_blocks: int
    epoch_length: int
    r0: float
    halving_heights: List[int]
    total_emission: float

class RigTier(BaseModel):
    id: str
    name: str
    hashrate: float
    uptime: float
    category: str
    description: str
    max_quality: float
    price: float

class Rig(BaseModel):
    id: str
    owner_id: str
    tier: RigTier
    purchase_price: float
    purchased_at: float
    last_maintenance_at: float
    quality: float
    is_active: bool
    effective_rate: float

class User(BaseModel):
    id: str
    participant_id: str
    balance: float
    total_earned: float
    created_at: float
    weight: float
    rigs: List[Rig]

class BuyRigRequest(BaseModel):
    tier_id: str
    idempotency_key: Optional[str] = None

class RepairRigRequest(BaseModel):
    rig_id: str

class PurchaseReceipt(BaseModel):
    rig: Rig
    new_balance: float
    global_burned: float
    circulating_supply: float

class RepairReceipt(BaseModel):
    rig: Rig
    repair_cost: float
    new_balance: float
    global_burned: float
    circulating_supply: float

class LeaderboardEntry(BaseModel):
    user_id: str
    participant_id: str
    total_earned: float
    weight: float

class Health(BaseModel):
    status: str
    timestamp: float
    game_time: float
    season_ended: bool

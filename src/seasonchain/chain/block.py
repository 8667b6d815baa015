# src/seasonchain/chain/block.py
from typing import Tuple, Dict, Any
from dataclasses import dataclass
import hashlib
import json

GENESIS_PREVIOUS_HASH = "0" * 64
MAX_TARGET = 0x00000000FFFF0000000000000000000000000000000000000000000000000000

def calculate_work_target(difficulty: float) -> str:
    """Simplified work target for display"""
    target = MAX_TARGET // max(1, int(difficulty))
    return format(target, '064x')

def calculate_block_hash(height: int, previous_hash: str, timestamp: float, nonce: int) -> str:
    """Calculate block hash from header fields"""
    header_dict = {
        "height": height,
        "previous_hash": previous_hash,
        "timestamp": timestamp,
        "nonce": nonce
    }
    header_string = json.dumps(header_dict, sort_keys=True)
    return hashlib.sha256(header_string.encode()).hexdigest()

@dataclass(frozen=True)
class Transaction:
    """Synthetic transaction carried in a block for display"""
    tx_id: str
    amount: float
    fee: float
    sender: str
    recipient: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.tx_id,
            "amount": self.amount,
            "fee": self.fee,
            "sender": self.sender,
            "recipient": self.recipient
        }

@dataclass(frozen=True)
class Block:
    """Immutable record of an accepted block"""
    height: int
    timestamp: float
    hash: str
    previous_hash: str
    difficulty: float
    subsidy: float
    total_fees: float
    tx_count: int
    is_orphan: bool
    transactions: Tuple[Transaction, ...]
    work_target: str

    @property
    def reward(self) -> float:
        return self.subsidy + self.total_fees

    def to_dict(self) -> Dict[str, Any]:
        """Convert block to dictionary"""
        return {
            "height": self.height,
            "timestamp": self.timestamp,
            "hash": self.hash,
            "previous_hash": self.previous_hash,
            "difficulty": self.difficulty,
            "subsidy": self.subsidy,
            "total_fees": self.total_fees,
            "reward": self.reward,
            "tx_count": self.tx_count,
            "is_orphan": self.is_orphan,
            "work_target": self.work_target,
            "transactions": [tx.to_dict() for tx in self.transactions]
        }

    def __str__(self) -> str:
        return (
            f"Block(height={self.height}, "
            f"hash={self.hash[:8]}..., "
            f"subsidy={self.subsidy:.6f}, "
            f"tx_count={self.tx_count})"
        )

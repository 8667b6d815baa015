# tests/test_ledger.py
import pytest

from seasonchain.exceptions import (
    DuplicateRequestError,
    InsufficientBalanceError,
    RigNotFoundError,
    UnknownRigTierError,
)
from seasonchain.ledger.account_store import AccountStore
from seasonchain.ledger.distribution import distribute_reward, network_weight
from seasonchain.ledger.equipment import RIG_TIERS, Rig, decayed_quality, repair_cost

HOUR = 3600

class TestDistribution:
    def test_proportional_shares(self):
        shares = distribute_reward(100, {"a": 10, "b": 0, "c": 30}, 40)
        assert shares == {"a": 25, "c": 75}

    def test_floor_applies_to_small_networks(self):
        assert network_weight([10, 20], 100) == 100
        assert network_weight([60, 70], 100) == 130
        assert network_weight([], 100) == 100

    def test_shares_sum_below_amount_under_floor(self):
        shares = distribute_reward(100, {"a": 10}, network_weight([10], 100))
        assert shares == {"a": 10}

    def test_no_participants(self):
        assert distribute_reward(100, {}, 100) == {}

    def test_non_positive_total_rejected(self):
        with pytest.raises(ValueError):
            distribute_reward(100, {"a": 1}, 0)

class TestEquipment:
    @pytest.fixture
    def rig(self):
        tier = RIG_TIERS[0].priced(10)
        return Rig(
            rig_id="rig-1",
            owner_id="user-1",
            tier=tier,
            purchase_price=tier.price,
            purchased_at=0.0,
            last_maintenance_at=0.0
        )

    def test_dynamic_price(self):
        prices = {tier.tier_id: tier.priced(10).price for tier in RIG_TIERS}
        assert prices == {
            "antminer-s9": 12_000,
            "antminer-s19-pro": 70_000,
            "whatsminer-m30s": 150_000,
            "golden-dragon": 300_000,
        }

    def test_linear_decay(self):
        assert decayed_quality(100, 40) == 80
        assert decayed_quality(100, 200) == 0
        assert decayed_quality(100, 0) == 100

    def test_rig_decays_with_game_time(self, rig):
        assert rig.current_quality(40 * HOUR) == 80
        assert rig.effective_rate(0) == pytest.approx(13.5 * 0.95)
        assert rig.effective_rate(40 * HOUR) == pytest.approx(13.5 * 0.95 * 0.8)
        assert rig.effective_rate(200 * HOUR) == 0

    def test_inactive_rig_has_no_rate(self, rig):
        rig.is_active = False
        assert rig.effective_rate(0) == 0

    def test_repair_cost(self, rig):
        assert repair_cost(80, 12_000) == 1200
        assert repair_cost(100, 12_000) == 0
        assert repair_cost(99.99, 10) == 1
        assert rig.repair_cost(40 * HOUR) == 1200

    def test_repair_resets_decay_clock(self, rig):
        rig.repair(40 * HOUR)
        assert rig.current_quality(40 * HOUR) == 100
        assert rig.current_quality(50 * HOUR) == 95

class TestAccountStore:
    @pytest.fixture
    def store(self):
        return AccountStore(starting_balance=15_000, initial_circulating=1_000_000, weight_floor=100)

    def test_participant_created_on_first_use(self, store):
        participant = store.get_participant("alice")
        assert participant.balance == 15_000
        assert store.get_participant("alice") is participant
        assert store.participant_ids() == ["alice"]

    def test_credit(self, store):
        store.credit_participant("alice", 12.5)
        participant = store.get_participant("alice")
        assert participant.balance == 15_012.5
        assert participant.total_earned == 12.5

    def test_buy_rig_burns_price(self, store):
        rig = store.buy_rig("alice", "antminer-s9", current_reward=10, now=0.0)

        assert rig.purchase_price == 12_000
        assert store.get_participant("alice").balance == 3_000
        assert store.global_burned == 12_000
        assert store.circulating_supply == 988_000
        assert store.burn_ledger[0].reason == "rig_purchase"
        assert store.get_participant_weight("alice", 0.0) == pytest.approx(13.5 * 0.95)

    def test_buy_rig_insufficient_balance(self, store):
        with pytest.raises(InsufficientBalanceError) as excinfo:
            store.buy_rig("alice", "golden-dragon", current_reward=10, now=0.0)
        assert excinfo.value.required == 300_000
        assert store.get_participant("alice").balance == 15_000
        assert store.global_burned == 0

    def test_buy_rig_unknown_tier(self, store):
        with pytest.raises(UnknownRigTierError):
            store.buy_rig("alice", "abacus", current_reward=10, now=0.0)

    def test_duplicate_idempotency_key(self, store):
        store.buy_rig("alice", "antminer-s9", current_reward=1, now=0.0, idempotency_key="k1")
        with pytest.raises(DuplicateRequestError):
            store.buy_rig("alice", "antminer-s9", current_reward=1, now=0.0, idempotency_key="k1")
        assert len(store.get_participant("alice").rigs) == 1

    def test_repair_rig(self, store):
        rig = store.buy_rig("alice", "antminer-s9", current_reward=10, now=0.0)
        store.credit_participant("alice", 10_000)

        cost = store.repair_rig("alice", rig.rig_id, now=40 * HOUR)

        assert cost == 1200
        assert store.get_participant("alice").balance == 3_000 + 10_000 - 1_200
        assert store.global_burned == 13_200
        assert store.burn_ledger[-1].reason == "rig_repair"
        assert rig.current_quality(40 * HOUR) == 100

    def test_repair_at_full_quality_is_free(self, store):
        rig = store.buy_rig("alice", "antminer-s9", current_reward=10, now=0.0)
        assert store.repair_rig("alice", rig.rig_id, now=0.0) == 0
        assert len(store.burn_ledger) == 1

    def test_repair_insufficient_balance(self, store):
        rig = store.buy_rig("alice", "antminer-s9", current_reward=10, now=0.0)
        store.get_participant("alice").balance = 0
        with pytest.raises(InsufficientBalanceError):
            store.repair_rig("alice", rig.rig_id, now=40 * HOUR)

    def test_repair_unknown_rig(self, store):
        with pytest.raises(RigNotFoundError):
            store.repair_rig("alice", "missing", now=0.0)

    def test_network_weight_floor(self, store):
        assert store.get_total_network_weight(0.0) == 100
        store.buy_rig("alice", "antminer-s9", current_reward=1, now=0.0)
        assert store.get_total_network_weight(0.0) == 100

    def test_rig_tiers_priced(self, store):
        tiers = store.rig_tiers(current_reward=10)
        assert [tier.price for tier in tiers] == [12_000, 70_000, 150_000, 300_000]

    def test_leaderboard(self, store):
        store.credit_participant("alice", 5)
        store.credit_participant("bob", 50)
        store.credit_participant("carol", 20)

        board = store.leaderboard(limit=2)

        assert [entry["participant_id"] for entry in board] == ["bob", "carol"]
        assert board[0]["total_earned"] == 50

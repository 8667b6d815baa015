# tests/test_chain_state.py
import pytest

from seasonchain.chain.block import Block, GENESIS_PREVIOUS_HASH, calculate_block_hash, calculate_work_target
from seasonchain.chain.chain_state import ChainState
from seasonchain.exceptions import BlockNotFoundError

def make_block(height, timestamp, previous_hash=GENESIS_PREVIOUS_HASH):
    return Block(
        height=height,
        timestamp=timestamp,
        hash=calculate_block_hash(height, previous_hash, timestamp, 0),
        previous_hash=previous_hash,
        difficulty=1.0,
        subsidy=1.0,
        total_fees=0.0,
        tx_count=0,
        is_orphan=False,
        transactions=(),
        work_target=calculate_work_target(1.0)
    )

def fill(chain, count, spacing):
    for _ in range(count):
        height = chain.height + 1
        chain.append(make_block(height, height * spacing, chain.tip_hash))

class TestChainState:
    @pytest.fixture
    def chain(self):
        return ChainState(
            target_block_interval=10,
            initial_difficulty=1000,
            retarget_blocks=4,
            max_adjustment=4,
            max_blocks_in_memory=10
        )

    def test_initial_state(self, chain):
        assert chain.height == 0
        assert chain.avg_block_time == 10
        assert chain.latest_block is None
        assert chain.tip_hash == GENESIS_PREVIOUS_HASH
        assert chain.blocks_until_retarget == 4

    def test_append_links_and_advances(self, chain):
        fill(chain, 3, 10)
        assert chain.height == 3
        assert chain.last_block_time == 30
        assert chain.blocks[1].previous_hash == chain.blocks[0].hash
        assert chain.blocks_until_retarget == 1

    def test_append_rejects_gap(self, chain):
        with pytest.raises(ValueError):
            chain.append(make_block(2, 0))

    def test_buffer_drops_oldest(self, chain):
        fill(chain, 15, 10)
        assert len(chain) == 10
        assert chain.blocks[0].height == 6
        assert chain.height == 15

    def test_ema(self, chain):
        assert chain.update_avg_block_time(20) == pytest.approx(11.0)
        assert chain.update_avg_block_time(20) == pytest.approx(11.9)

    def test_no_retarget_off_boundary(self, chain):
        fill(chain, 3, 1)
        assert chain.retarget_difficulty() is None
        assert chain.difficulty == 1000

    def test_retarget_slow_blocks_clamped(self, chain):
        fill(chain, 4, 1000)
        assert chain.retarget_difficulty() == 0.25
        assert chain.difficulty == 250

    def test_retarget_fast_blocks_clamped(self, chain):
        fill(chain, 4, 0.001)
        assert chain.retarget_difficulty() == 4
        assert chain.difficulty == 4000

    def test_retarget_on_target_is_neutral(self, chain):
        fill(chain, 4, 10)
        assert chain.retarget_difficulty() == pytest.approx(1.0)
        assert chain.difficulty == pytest.approx(1000)

    def test_retarget_zero_elapsed_uses_max(self, chain):
        for height in range(1, 5):
            chain.append(make_block(height, 50.0, chain.tip_hash))
        assert chain.retarget_difficulty() == 4

    def test_retarget_with_single_buffered_block(self):
        chain = ChainState(target_block_interval=10, retarget_blocks=1, max_blocks_in_memory=1)
        fill(chain, 1, 10)
        assert chain.retarget_difficulty() is None

    def test_get_block(self, chain):
        fill(chain, 12, 10)
        assert chain.get_block(12).height == 12
        with pytest.raises(BlockNotFoundError):
            chain.get_block(1)
        with pytest.raises(BlockNotFoundError):
            chain.get_block(99)

    def test_pagination(self, chain):
        fill(chain, 5, 10)

        page, cursor = chain.get_blocks(limit=2)
        assert [b.height for b in page] == [5, 4]
        assert cursor == 4

        page, cursor = chain.get_blocks(cursor, 2)
        assert [b.height for b in page] == [3, 2]
        assert cursor == 2

        page, cursor = chain.get_blocks(cursor, 2)
        assert [b.height for b in page] == [1]
        assert cursor is None

    def test_pagination_exact_fit(self, chain):
        fill(chain, 4, 10)
        page, cursor = chain.get_blocks(3, 2)
        assert [b.height for b in page] == [2, 1]
        assert cursor is None

    def test_pagination_empty_chain(self, chain):
        page, cursor = chain.get_blocks()
        assert page == []
        assert cursor is None

class TestBlock:
    def test_reward_includes_fees(self):
        block = make_block(1, 0)
        assert block.reward == 1.0
        assert block.to_dict()["reward"] == 1.0

    def test_hash_depends_on_header(self):
        assert calculate_block_hash(1, "a", 0, 1) != calculate_block_hash(1, "a", 0, 2)
        assert calculate_block_hash(1, "a", 0, 1) == calculate_block_hash(1, "a", 0, 1)
        assert len(calculate_block_hash(1, "a", 0, 1)) == 64

    def test_work_target_shrinks_with_difficulty(self):
        assert int(calculate_work_target(4), 16) < int(calculate_work_target(1), 16)

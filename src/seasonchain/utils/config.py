# src/seasonchain/utils/config.py

class Config:
    # Season configuration
    SEASON_DAYS = 7
    TARGET_BLOCK_INTERVAL_SEC = 10
    TOTAL_EMISSION = 210_000_000
    HALVING_EPOCHS = 4

    # Mining loop configuration
    TICK_SECONDS = 1.0
    DIFFICULTY_RETARGET_BLOCKS = 2016
    MAX_DIFFICULTY_ADJUSTMENT = 4  # Max 4x difficulty change per retarget
    INITIAL_DIFFICULTY = 1_000_000
    MAX_BLOCKS_IN_MEMORY = 500
    MAX_TRANSACTIONS_PER_BLOCK = 10  # Payload cap, logical count may be larger
    MIN_LOGICAL_TX = 100
    MAX_LOGICAL_TX = 1099
    MAX_TX_AMOUNT = 10.0
    MAX_TX_FEE = 0.001
    ORPHAN_PROBABILITY = 0.02

    # Ledger configuration
    NETWORK_WEIGHT_FLOOR = 100.0  # TH/s baseline so the network never weighs zero
    STARTING_BALANCE = 15_000.0
    INITIAL_CIRCULATING = 1_000_000.0
    QUALITY_DECAY_PER_HOUR = 0.5  # quality points per simulated hour
    REPAIR_COST_RATE = 0.005  # share of purchase price per quality point restored
    MAX_QUALITY = 100.0

    # Dynamic pricing, in units of the current block reward
    PRICE_UNITS_PER_TIER = {
        "basic": 1200,
        "advanced": 7000,
        "professional": 15000,
        "legendary": 30000,
    }

    # Game clock
    GAME_START = "2009-01-01T00:00:00+00:00"
    TIME_ACCELERATION = 1.0

    # API configuration
    API_HOST = "127.0.0.1"
    API_PORT = 3001
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
    WS_QUEUE_SIZE = 256

"""
Configuration for the self-checkout store simulation.
"""

# ============================================================================
# SERVICE TIME (minutes)
# ============================================================================

# total_time = INIT_TIME + TIME_PER_ITEM * items + extra_delay + PAYMENT_TIME
INIT_TIME = 0.5  # walking up, starting the session
TIME_PER_ITEM = 0.1  # scanning one item
FIX_TIME = 2.0  # extra delay when a worker has to fix an issue
PAYMENT_TIME = 1.0

# Remaining time at or below this counts as finished
COMPLETION_THRESHOLD = 0.001

# ============================================================================
# CUSTOMERS
# ============================================================================

MIN_ITEMS = 1
MAX_ITEMS = 25  # inclusive

# Basket value = items * uniform[PRICE_PER_ITEM_MIN, PRICE_PER_ITEM_MAX)
PRICE_PER_ITEM_MIN = 1.0
PRICE_PER_ITEM_MAX = 10.0

# Chance that a customer needs a worker at the self-checkout
ISSUE_PROBABILITY = 0.1

# ============================================================================
# COSTS
# ============================================================================

WORKER_WAGE = 16.5  # dollars per hour
OVERHEAD_COST_PERCENTAGE = 0.3  # share of gross
ITEM_COST_MAX = 5.0  # wholesale cost per item ~ uniform[0, ITEM_COST_MAX)

# ============================================================================
# WAIT TIME ACCRUAL
# ============================================================================

# "occupancy": +1 minute per occupied lane per simulated minute
# "completion": full service time added when a customer finishes
WAIT_ACCRUAL = "occupancy"
WAIT_ACCRUAL_POLICIES = ("occupancy", "completion")

# ============================================================================
# SIMULATION
# ============================================================================

NUM_LANES = 4
ARRIVAL_PROB = 0.6
NUM_WORKERS = 2
SIM_DURATION = 120  # minutes
MAX_CUST_PER_MIN = 3

NUM_SEEDS = 10  # number of independent runs in batch mode
RANDOM_SEED_BASE = 42

# ============================================================================
# OUTPUT
# ============================================================================

OUTPUT_DIR = "outputs"
LOG_DIR = f"{OUTPUT_DIR}/logs"
PLOT_DIR = f"{OUTPUT_DIR}/plots"
REPORT_DIR = f"{OUTPUT_DIR}/reports"

# CSV event log columns
EVENT_LOG_COLUMNS = [
    "minute",
    "event_type",  # "joined", "worker_assigned", "stalled", "in_service", "completed"
    "customer_number",
    "lane",
    "item_count",
    "remaining_time",  # None for joined/completed/stalled events
]

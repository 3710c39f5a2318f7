"""
Per-lane, per-minute state machine for the self-checkouts.

Each lane keeps a remaining-time entry:
- 0 with no customer in service: IDLE (or a head waiting to start)
- finite and > 0: IN_SERVICE, counts down one minute per tick
- at or below the completion threshold after service: COMPLETING
- math.inf: STALLED, the head customer has an issue and no worker was free
"""

import logging
import math
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import config
from store_sim.customer import Customer
from store_sim.event_log import Event, EventLog
from store_sim.lane import CheckoutLane
from store_sim.metrics import MetricsAccumulator
from store_sim.workers import WorkerPool

logger = logging.getLogger(__name__)


class LaneState(Enum):
    IDLE = "idle"
    COMPLETING = "completing"
    IN_SERVICE = "in_service"
    STALLED = "stalled"


class LaneProcessor:
    """Advances every lane's checkout by one minute at a time."""

    def __init__(
        self,
        lanes: Sequence[CheckoutLane],
        workers: WorkerPool,
        metrics: MetricsAccumulator,
        event_log: Optional[EventLog] = None,
        init_time: float = config.INIT_TIME,
        per_item_time: float = config.TIME_PER_ITEM,
        fix_time: float = config.FIX_TIME,
        payment_time: float = config.PAYMENT_TIME,
        completion_threshold: float = config.COMPLETION_THRESHOLD,
        wait_accrual: str = config.WAIT_ACCRUAL,
    ):
        """Initialize lane processor.

        Args:
            lanes: checkout lanes, processed in index order
            workers: shared worker pool for issue fixes
            metrics: running totals updated on completion
            event_log: where lane events are recorded, None to skip
            init_time: session start time per customer
            per_item_time: scan time per item
            fix_time: extra delay when a worker fixes an issue
            payment_time: payment time per customer
            completion_threshold: remaining time treated as finished
            wait_accrual: "occupancy" or "completion"
        """
        self.lanes = lanes
        self.workers = workers
        self.metrics = metrics
        self.event_log = event_log
        self.init_time = init_time
        self.per_item_time = per_item_time
        self.fix_time = fix_time
        self.payment_time = payment_time
        self.completion_threshold = completion_threshold
        self.wait_accrual = wait_accrual

        n = len(lanes)
        self.remaining_time: List[float] = [0.0] * n
        self.in_service: List[bool] = [False] * n
        self.holds_worker: List[bool] = [False] * n
        self.service_time: List[float] = [0.0] * n
        self.actions: List[List[Tuple[str, int]]] = [[] for _ in range(n)]

    def state(self, index: int) -> LaneState:
        if self.lanes[index].peek() is None:
            return LaneState.IDLE
        remaining = self.remaining_time[index]
        if math.isinf(remaining):
            return LaneState.STALLED
        if self.in_service[index] and remaining <= self.completion_threshold:
            return LaneState.COMPLETING
        if self.in_service[index]:
            return LaneState.IN_SERVICE
        return LaneState.IDLE

    def start_minute(self):
        """Forget the previous minute's lane actions."""
        self.actions = [[] for _ in self.lanes]

    def record_event(self, minute: int, event_type: str, index: int, customer: Customer, remaining=None):
        self.actions[index].append((event_type, customer.number))
        if self.event_log is not None:
            self.event_log.log_event(
                Event(
                    minute=minute,
                    event_type=event_type,
                    customer_number=customer.number,
                    lane=index,
                    item_count=customer.item_count,
                    remaining_time=remaining,
                )
            )

    def handle_completed(self, index: int, minute: int) -> Optional[Customer]:
        """Release the head customer if their checkout is finished.

        Returns:
            The departing customer, or None if nothing completed
        """
        if self.state(index) is not LaneState.COMPLETING:
            return None

        customer = self.lanes[index].dequeue()
        wait = self.service_time[index] if self.wait_accrual == "completion" else 0.0
        self.metrics.record_completion(customer, wait_time=wait)

        if self.holds_worker[index]:
            self.workers.release()
            self.holds_worker[index] = False

        self.remaining_time[index] = 0.0
        self.in_service[index] = False
        self.service_time[index] = 0.0

        logger.debug("Customer #%d finished at lane %d", customer.number, index + 1)
        self.record_event(minute, "completed", index, customer)
        return customer

    def _start_service(self, index: int, customer: Customer, minute: int) -> bool:
        """Decide the head customer's service time.

        Returns:
            False if the customer has an issue and no worker is free
        """
        extra_delay = 0.0
        if customer.has_issue:
            if not self.workers.acquire():
                self.remaining_time[index] = math.inf
                logger.debug(
                    "Customer #%d at lane %d has an issue, no workers available",
                    customer.number,
                    index + 1,
                )
                self.record_event(minute, "stalled", index, customer)
                return False

            self.holds_worker[index] = True
            extra_delay = self.fix_time
            logger.debug(
                "Customer #%d at lane %d has an issue, worker assigned (%d left)",
                customer.number,
                index + 1,
                self.workers.available,
            )

        duration = customer.total_time_spent(
            self.init_time, self.per_item_time, extra_delay, self.payment_time
        )
        self.remaining_time[index] = duration
        self.service_time[index] = duration
        self.in_service[index] = True
        if customer.has_issue:
            self.record_event(minute, "worker_assigned", index, customer, duration)
        return True

    def advance(self, index: int, minute: int):
        """Start or continue service at a lane for the current minute."""
        customer = self.lanes[index].peek()
        if customer is None:
            return

        if not self.in_service[index]:
            if not self._start_service(index, customer, minute):
                return

        remaining = self.remaining_time[index]
        if remaining > 0:
            self.record_event(minute, "in_service", index, customer, remaining)
            self.remaining_time[index] = max(0.0, remaining - 1.0)

    def occupied_lanes(self) -> int:
        return sum(1 for lane in self.lanes if not lane.is_empty())

    def stalled_lanes(self) -> int:
        return sum(1 for i in range(len(self.lanes)) if self.state(i) is LaneState.STALLED)

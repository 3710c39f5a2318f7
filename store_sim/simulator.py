"""
Store simulator: the minute-by-minute self-checkout engine.
Drives arrivals, lane processing and metrics on a SimPy clock.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence
import numpy as np
import simpy
import config
from store_sim.arrivals import ArrivalGenerator
from store_sim.customer import CustomerFactory
from store_sim.errors import InvalidConfigurationError
from store_sim.event_log import EventLog
from store_sim.lane import CheckoutLane
from store_sim.metrics import MetricsAccumulator, SimulationReport, build_report
from store_sim.processor import LaneProcessor
from store_sim.status import LaneSnapshot
from store_sim.workers import WorkerPool

logger = logging.getLogger(__name__)

MinuteCallback = Callable[[int, Sequence[LaneSnapshot]], None]


class StoreSimulator:
    """Self-checkout area with a fixed number of lanes and workers."""

    def __init__(
        self,
        number_of_lanes: int = config.NUM_LANES,
        arrival_prob: float = config.ARRIVAL_PROB,
        num_workers: int = config.NUM_WORKERS,
        duration: int = config.SIM_DURATION,
        max_cust_per_min: int = config.MAX_CUST_PER_MIN,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        env: Optional[simpy.Environment] = None,
        event_log: Optional[EventLog] = None,
        issue_probability: float = config.ISSUE_PROBABILITY,
        wait_accrual: str = config.WAIT_ACCRUAL,
        on_minute: Optional[MinuteCallback] = None,
    ):
        """Initialize store simulator.

        Args:
            number_of_lanes: Number of self-checkout lanes (> 0)
            arrival_prob: Chance each candidate customer joins a line (0 < p <= 1)
            num_workers: Workers available to fix issues (>= 0)
            duration: Simulated minutes (>= 0)
            max_cust_per_min: Most candidate arrivals in one minute
            seed: Seed for the default random generator
            rng: Random generator to use instead of one built from ``seed``
            env: SimPy environment driving the clock
            event_log: EventLog for lane events, in-memory if omitted
            issue_probability: Chance a customer needs a worker
            wait_accrual: "occupancy" or "completion"
            on_minute: Called with (minute, lane snapshots) after every minute

        Raises:
            InvalidConfigurationError: if lanes, probability, workers or duration are out of range
        """
        if number_of_lanes <= 0:
            raise InvalidConfigurationError("Number of checkouts must be at least 1.")
        if arrival_prob <= 0 or arrival_prob > 1:
            raise InvalidConfigurationError("Arrival probability must be between 0 and 1.")
        if num_workers < 0:
            raise InvalidConfigurationError("Number of workers cannot be negative.")
        if duration < 0:
            raise InvalidConfigurationError("Duration cannot be negative.")
        if wait_accrual not in config.WAIT_ACCRUAL_POLICIES:
            raise InvalidConfigurationError(f"Unknown wait accrual policy: {wait_accrual!r}")

        self.number_of_lanes = number_of_lanes
        self.arrival_prob = arrival_prob
        self.total_num_workers = num_workers
        self.duration = duration
        self.max_cust_per_min = max_cust_per_min
        self.wait_accrual = wait_accrual
        self.on_minute = on_minute

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.env = env if env is not None else simpy.Environment()
        self.event_log = event_log if event_log is not None else EventLog()

        self.lanes: List[CheckoutLane] = [CheckoutLane() for _ in range(number_of_lanes)]
        self.workers = WorkerPool(num_workers)
        self.metrics = MetricsAccumulator(item_cost_seed=int(self.rng.integers(0, 2**32)))
        self.factory = CustomerFactory(self.rng, issue_probability=issue_probability)
        self.arrivals = ArrivalGenerator(self.rng, self.factory, arrival_prob, max_cust_per_min)
        self.processor = LaneProcessor(
            self.lanes,
            self.workers,
            self.metrics,
            event_log=self.event_log,
            wait_accrual=wait_accrual,
        )

        self.minute = 0
        self.history: List[Dict] = []

    @property
    def remaining_time(self) -> List[float]:
        return self.processor.remaining_time

    def step(self) -> List[LaneSnapshot]:
        """Simulate one minute.

        Returns:
            Lane snapshots at the end of the minute
        """
        self.minute += 1
        minute = self.minute
        self.processor.start_minute()

        for index in range(self.number_of_lanes):
            self.processor.handle_completed(index, minute)

        for index, customer in self.arrivals.generate(self.lanes):
            self.metrics.record_arrival()
            self.processor.record_event(minute, "joined", index, customer)

        for index in range(self.number_of_lanes):
            self.processor.advance(index, minute)

        if self.wait_accrual == "occupancy":
            self.metrics.accrue_wait(float(self.processor.occupied_lanes()))

        self.history.append(
            {
                "minute": minute,
                "queued_customers": sum(lane.size() for lane in self.lanes),
                "occupied_lanes": self.processor.occupied_lanes(),
                "stalled_lanes": self.processor.stalled_lanes(),
                "workers_available": self.workers.available,
            }
        )

        snapshots = self.snapshot()
        if self.on_minute is not None:
            self.on_minute(minute, snapshots)
        return snapshots

    def snapshot(self) -> List[LaneSnapshot]:
        """Current status of every lane."""
        snapshots = []
        for index, lane in enumerate(self.lanes):
            head = lane.peek()
            snapshots.append(
                LaneSnapshot(
                    lane=index,
                    state=self.processor.state(index).value,
                    queue_length=lane.size(),
                    customer_number=head.number if head is not None else None,
                    remaining_time=self.processor.remaining_time[index] if head is not None else None,
                    actions=tuple(self.processor.actions[index]),
                )
            )
        return snapshots

    def clock_process(self):
        """SimPy process: one unit of simulated time per store minute."""
        while self.minute < self.duration:
            self.step()
            yield self.env.timeout(1)

    def run(self) -> SimulationReport:
        """Run the remaining minutes and return the report."""
        logger.info(
            "Starting simulation: %d lane(s), %d worker(s), %d minute(s)",
            self.number_of_lanes,
            self.total_num_workers,
            self.duration,
        )
        clock = self.env.process(self.clock_process())
        self.env.run(until=clock)

        report = self.report()
        logger.info(
            "Simulation complete: %d/%d customers served",
            report.total_customers_served,
            report.total_customers,
        )
        return report

    def report(self) -> SimulationReport:
        return build_report(self.metrics, self.total_num_workers, self.duration)

    def parameters(self) -> Dict:
        return {
            "number_of_lanes": self.number_of_lanes,
            "arrival_prob": self.arrival_prob,
            "num_workers": self.total_num_workers,
            "duration": self.duration,
            "max_cust_per_min": self.max_cust_per_min,
            "wait_accrual": self.wait_accrual,
        }

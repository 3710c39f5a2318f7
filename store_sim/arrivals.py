"""
Arrival model for the store.

Every minute up to ``max_cust_per_min`` shoppers walk up to the
self-checkout area:
- the number of candidates is uniform on [0, max_cust_per_min]
- each candidate actually joins with probability ``arrival_prob``
- a joining customer goes to the lane with the shortest line
"""

import logging
from typing import List, Sequence, Tuple
import numpy as np
from store_sim.customer import Customer, CustomerFactory
from store_sim.lane import CheckoutLane

logger = logging.getLogger(__name__)


def least_busy_lane(lanes: Sequence[CheckoutLane]) -> int:
    """Index of the lane with the fewest customers, lowest index on ties."""
    best = 0
    for index, lane in enumerate(lanes):
        if lane.size() < lanes[best].size():
            best = index
    return best


class ArrivalGenerator:
    """Draws each minute's arrivals and routes them to lanes."""

    def __init__(
        self,
        rng: np.random.Generator,
        factory: CustomerFactory,
        arrival_prob: float,
        max_cust_per_min: int,
    ):
        self.rng = rng
        self.factory = factory
        self.arrival_prob = arrival_prob
        self.max_cust_per_min = max_cust_per_min

    def candidate_count(self) -> int:
        if self.max_cust_per_min <= 0:
            return 0
        return int(self.rng.integers(0, self.max_cust_per_min + 1))

    def generate(self, lanes: Sequence[CheckoutLane]) -> List[Tuple[int, Customer]]:
        """Run one minute of arrivals.

        Args:
            lanes: checkout lanes; accepted customers are enqueued in place

        Returns:
            (lane_index, customer) for every customer who joined a line
        """
        joined = []
        for _ in range(self.candidate_count()):
            if self.rng.random() > self.arrival_prob:
                continue

            customer = self.factory.create()
            index = least_busy_lane(lanes)
            lanes[index].enqueue(customer)
            joined.append((index, customer))
            logger.debug(
                "Customer #%d joined lane %d with %d item(s)",
                customer.number,
                index + 1,
                customer.item_count,
            )

        return joined

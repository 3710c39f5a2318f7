"""
Customer records and the factory that draws them.
"""

import itertools
from dataclasses import dataclass
import numpy as np
import config


@dataclass(frozen=True)
class Customer:
    """A shopper at the self-checkout. Fixed once created."""
    number: int
    item_count: int
    price_of_items: float
    has_issue: bool = False

    def total_time_spent(
        self,
        init_time: float = config.INIT_TIME,
        per_item_time: float = config.TIME_PER_ITEM,
        extra_delay: float = 0.0,
        payment_time: float = config.PAYMENT_TIME,
    ) -> float:
        """Compute how long this customer occupies a lane.

        Args:
            init_time: fixed time to start a session (>= 0)
            per_item_time: scanning time per item (>= 0)
            extra_delay: issue fix delay, 0 when no worker is involved (>= 0)
            payment_time: fixed time to pay (>= 0)

        Returns:
            Service time in minutes
        """
        if min(init_time, per_item_time, extra_delay, payment_time) < 0:
            raise ValueError("time components must be >= 0")

        return float(init_time + per_item_time * self.item_count + extra_delay + payment_time)


class CustomerFactory:
    """Creates customers with sequential numbers and random baskets."""

    def __init__(
        self,
        rng: np.random.Generator,
        issue_probability: float = config.ISSUE_PROBABILITY,
        min_items: int = config.MIN_ITEMS,
        max_items: int = config.MAX_ITEMS,
        price_per_item_min: float = config.PRICE_PER_ITEM_MIN,
        price_per_item_max: float = config.PRICE_PER_ITEM_MAX,
    ):
        """Initialize customer factory.

        Args:
            rng: random source shared with the rest of the simulation
            issue_probability: chance a customer needs a worker (0-1)
            min_items: smallest basket (>= 0)
            max_items: largest basket, inclusive
            price_per_item_min: lower bound of the average item price
            price_per_item_max: upper bound of the average item price
        """
        if not 0 <= issue_probability <= 1:
            raise ValueError("issue_probability must be within [0, 1]")
        if min_items < 0 or max_items < min_items:
            raise ValueError("need 0 <= min_items <= max_items")

        self.rng = rng
        self.issue_probability = issue_probability
        self.min_items = min_items
        self.max_items = max_items
        self.price_per_item_min = price_per_item_min
        self.price_per_item_max = price_per_item_max
        self._numbers = itertools.count(1)

    def create(self) -> Customer:
        """Draw a new customer."""
        item_count = int(self.rng.integers(self.min_items, self.max_items + 1))
        unit_price = float(self.rng.uniform(self.price_per_item_min, self.price_per_item_max))
        has_issue = bool(self.rng.random() < self.issue_probability)

        return Customer(
            number=next(self._numbers),
            item_count=item_count,
            price_of_items=unit_price * item_count,
            has_issue=has_issue,
        )

"""
Checkout lane: a FIFO line of customers in front of one self-checkout.
"""

from collections import deque
from typing import Iterator, Optional
from store_sim.customer import Customer


class CheckoutLane:
    """Unbounded FIFO queue. Only the head customer is ever being served."""

    def __init__(self):
        self.customers = deque()

    def enqueue(self, customer: Customer):
        self.customers.append(customer)

    def peek(self) -> Optional[Customer]:
        """Return the head customer without removing it, or None."""
        if not self.customers:
            return None
        return self.customers[0]

    def dequeue(self) -> Optional[Customer]:
        """Remove and return the head customer, or None when empty."""
        if not self.customers:
            return None
        return self.customers.popleft()

    def size(self) -> int:
        return len(self.customers)

    def __iter__(self) -> Iterator[Customer]:
        return iter(self.customers)

    def is_empty(self) -> bool:
        return not self.customers

import numpy as np

from store_sim.arrivals import ArrivalGenerator, least_busy_lane
from store_sim.customer import Customer, CustomerFactory
from store_sim.lane import CheckoutLane


def test_least_busy_lane_breaks_ties_by_index():
    lanes = [CheckoutLane() for _ in range(3)]
    assert least_busy_lane(lanes) == 0

    lanes[0].enqueue(Customer(number=1, item_count=1, price_of_items=1.0))
    assert least_busy_lane(lanes) == 1

    lanes[1].enqueue(Customer(number=2, item_count=1, price_of_items=1.0))
    lanes[2].enqueue(Customer(number=3, item_count=1, price_of_items=1.0))
    assert least_busy_lane(lanes) == 0


def test_arrivals_spread_over_lanes(scripted_rng):
    """Each accepted customer goes to the currently shortest line."""
    lanes = [CheckoutLane() for _ in range(3)]
    factory = CustomerFactory(scripted_rng, issue_probability=0.0)
    arrivals = ArrivalGenerator(scripted_rng, factory, arrival_prob=1.0, max_cust_per_min=3)

    joined = arrivals.generate(lanes)

    assert [index for index, _ in joined] == [0, 1, 2]
    assert [c.number for _, c in joined] == [1, 2, 3]
    assert [lane.size() for lane in lanes] == [1, 1, 1]


def test_no_arrivals_when_max_is_zero():
    rng = np.random.default_rng(0)
    lanes = [CheckoutLane()]
    arrivals = ArrivalGenerator(rng, CustomerFactory(rng), arrival_prob=1.0, max_cust_per_min=0)

    for _ in range(50):
        assert arrivals.generate(lanes) == []
    assert lanes[0].size() == 0


def test_arrival_counts_within_bounds():
    rng = np.random.default_rng(99)
    lanes = [CheckoutLane() for _ in range(2)]
    arrivals = ArrivalGenerator(rng, CustomerFactory(rng), arrival_prob=0.5, max_cust_per_min=4)

    counts = [len(arrivals.generate(lanes)) for _ in range(500)]
    assert min(counts) >= 0
    assert max(counts) <= 4
    # mean of uniform[0, 4] thinned by 0.5 is 1.0
    assert 0.7 < np.mean(counts) < 1.3

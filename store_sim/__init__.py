"""
Self-checkout store simulation.
Customers arrive each minute, queue at the least busy lane, check out,
and occasionally need a worker to fix an issue.
"""

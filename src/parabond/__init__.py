"""
Parabond - portfolio pricing benchmark nodes.

Prices a fixed batch of bond portfolios held in a document store with two
parallel strategies and reports per-job and aggregate timings:

- parabond.cluster.memory_bound: bulk-load every portfolio, then price in memory
- parabond.cluster.fine_grained: fetch and price each bond of a portfolio concurrently
"""

__version__ = "0.1.0"

"""Node execution model: partition → deck → jobs → load/price → analysis.

Architecture::

    partition.py     Partition, build_deck, deck_checksum
    jobs.py          Job, Result, Analysis, PriceAccumulator
    node.py          Node (shared orchestration), BasicNode
    memory_bound.py  MemoryBoundNode  (bulk load, then price in memory)
    fine_grained.py  FineGrainedNode  (per-bond fetch + price fan-out)
    checks.py        check_reset / verify_checks around a run
    report.py        RunReport from an Analysis
"""

from parabond.cluster.fine_grained import FineGrainedNode
from parabond.cluster.jobs import Analysis, Job, PriceAccumulator, Result
from parabond.cluster.memory_bound import MemoryBoundNode
from parabond.cluster.node import BasicNode, Node
from parabond.cluster.partition import Partition, build_deck, deck_checksum

__all__ = [
    "Analysis",
    "BasicNode",
    "FineGrainedNode",
    "Job",
    "MemoryBoundNode",
    "Node",
    "Partition",
    "PriceAccumulator",
    "Result",
    "build_deck",
    "deck_checksum",
]

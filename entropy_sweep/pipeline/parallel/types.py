# entropy_sweep/pipeline/parallel/types.py
from enum import Enum


class ParallelKind(str, Enum):
    PARTITION = "partition"

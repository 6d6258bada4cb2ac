"""External collaborators: corpus word counting and cluster training."""

from .trainer import ClusterAssignment, ClusterTrainer, KMeansClusterTrainer
from .word_count import CorpusCounts, PandasWordCountEngine, WordCountEngine

__all__ = [
    "ClusterAssignment",
    "ClusterTrainer",
    "KMeansClusterTrainer",
    "CorpusCounts",
    "PandasWordCountEngine",
    "WordCountEngine",
]

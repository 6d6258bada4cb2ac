"""Cluster trainer adapter.

The trainer owns featurization: the slate and keyword text columns are
concatenated and vectorized with TF-IDF, then k-means assigns one label
per record plus the distance to every centroid. The cluster count is the
caller's choice.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Protocol, Sequence
import logging

import numpy as np
from sklearn.cluster import KMeans
from sklearn.feature_extraction.text import TfidfVectorizer

from ..pipeline.context import DocumentRecord

log = logging.getLogger("doc_categorization.engines.trainer")


@dataclass
class ClusterAssignment:
    label: int
    distances: List[float]


class ClusterTrainer(Protocol):
    def fit_predict(self, records: Sequence[DocumentRecord], clusters: int) -> List[ClusterAssignment]:
        ...


def feature_text(record: DocumentRecord) -> str:
    parts = [h for h in record.slate() if h] + [record.top_words]
    return " ".join(p for p in parts if p)


class KMeansClusterTrainer:
    name = "kmeans"

    def __init__(self, seed: int = 0, max_iter: int = 300, n_init: int = 10):
        self.seed = int(seed)
        self.max_iter = int(max_iter)
        self.n_init = int(n_init)

    def fit_predict(self, records: Sequence[DocumentRecord], clusters: int) -> List[ClusterAssignment]:
        if clusters < 1:
            raise ValueError(f"clusters must be >= 1, got {clusters}")
        if not records:
            return []
        if clusters > len(records):
            log.warning(f"clusters={clusters} exceeds records={len(records)}; using {len(records)}")
            clusters = len(records)

        vectorizer = TfidfVectorizer(lowercase=True, token_pattern=r"(?u)\b\w+\b")
        features = vectorizer.fit_transform([feature_text(r) for r in records])

        km = KMeans(n_clusters=clusters, random_state=self.seed, n_init=self.n_init, max_iter=self.max_iter)
        labels = km.fit_predict(features)
        distances = np.asarray(km.transform(features), dtype=float)

        log.info(f"KMeans fitted: records={len(records)} clusters={clusters} features={features.shape[1]}")
        return [
            ClusterAssignment(label=int(label), distances=[float(d) for d in row])
            for label, row in zip(labels, distances)
        ]

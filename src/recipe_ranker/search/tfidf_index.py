"""
tfidf_index.py

TF-IDF index over the normalized recipe corpus. This is the information
retrieval baseline that the personalization layer is blended on top of.

Definitions used throughout:
  - tokens(doc)    : weighted token stream from tokenizer.extract_tokens
  - df(term)       : number of documents containing the term at least once
  - idf(term)      : ln((N + 1) / (df(term) + 1))   (N = corpus size)
  - tf(term, doc)  : count(term, doc) / len(tokens(doc))
  - tfidf          : tf * idf, stored sparsely (zero entries are dropped)

A term present in every document gets idf = ln(1) = 0 and therefore carries
no weight. The index is built once per corpus snapshot; rebuilding produces a
new TFIDFIndex object and never mutates an existing one.

Query scoring is cosine-style: the query count vector is L2-normalized and
dotted with the document vector, then divided by the document's L2 norm.
"""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Sequence, Tuple

from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.logging_utils import get_logger
from src.recipe_ranker.search.tokenizer import extract_tokens, tokenize

logger = get_logger("tfidf_index")


@dataclass(frozen=True)
class Document:
    id: str
    recipe: NormalizedRecipe
    tokens: Tuple[str, ...]
    vector: Dict[str, float] = field(default_factory=dict)
    norm: float = 0.0


@dataclass(frozen=True)
class QueryMatch:
    id: str
    recipe: NormalizedRecipe
    relevance: float


def _l2_norm(values) -> float:
    return math.sqrt(sum(float(v) * float(v) for v in values))


def compute_idf(token_sets: Sequence[FrozenSet[str]], vocabulary: FrozenSet[str]) -> Dict[str, float]:
    total_docs = len(token_sets)
    df: Counter = Counter()
    for tokens in token_sets:
        df.update(tokens)
    # +1 smoothing avoids division by zero and log(0)
    return {term: math.log((total_docs + 1) / (df[term] + 1)) for term in sorted(vocabulary)}


def compute_tfidf(tokens: Sequence[str], idf: Dict[str, float]) -> Dict[str, float]:
    if not tokens:
        return {}
    counts = Counter(tokens)
    total = len(tokens)
    vector: Dict[str, float] = {}
    for term in sorted(counts):
        weight = (counts[term] / total) * idf.get(term, 0.0)
        if weight != 0.0:
            vector[term] = weight
    return vector


class TFIDFIndex:
    def __init__(self, documents: List[Document], vocabulary: FrozenSet[str], idf: Dict[str, float]) -> None:
        self.documents = documents
        self.vocabulary = vocabulary
        self.idf = idf
        self._by_id = {doc.id: doc for doc in documents}

    def __len__(self) -> int:
        return len(self.documents)

    def get(self, recipe_id: str) -> Document | None:
        return self._by_id.get(recipe_id)

    @property
    def recipes(self) -> List[NormalizedRecipe]:
        return [doc.recipe for doc in self.documents]

    def score(self, query: str) -> List[QueryMatch]:
        return score_query(query, self)

    def relevance_map(self, query: str) -> Dict[str, float]:
        return {m.id: m.relevance for m in score_query(query, self)}


def build_index(corpus: Sequence[NormalizedRecipe]) -> TFIDFIndex:
    """
    Build a TF-IDF index from normalized recipes.

    Deterministic: the same corpus (same order) always yields the same
    vocabulary, idf table and document vectors.
    """
    token_lists = [tuple(extract_tokens(recipe)) for recipe in corpus]
    token_sets = [frozenset(tokens) for tokens in token_lists]

    vocabulary: FrozenSet[str] = frozenset().union(*token_sets) if token_sets else frozenset()
    idf = compute_idf(token_sets, vocabulary)

    documents: List[Document] = []
    for recipe, tokens in zip(corpus, token_lists):
        vector = compute_tfidf(tokens, idf)
        documents.append(
            Document(
                id=recipe.id,
                recipe=recipe,
                tokens=tokens,
                vector=vector,
                norm=_l2_norm(vector.values()),
            )
        )

    logger.info(
        "Built TF-IDF index for %d recipes with %d terms",
        len(documents),
        len(vocabulary),
        extra={
            "invoking_func": "build_index",
            "invoking_purpose": "Build IR baseline for recommendations",
            "next_step": "Score queries / personalize",
            "resolution": "",
        },
    )
    return TFIDFIndex(documents=documents, vocabulary=vocabulary, idf=idf)


def query_vector(query: str) -> Dict[str, float]:
    """L2-normalized term-count vector for a free-text query (no field weighting)."""
    counts = Counter(tokenize(query, 1))
    if not counts:
        return {}
    norm = _l2_norm(counts.values()) or 1.0
    return {term: count / norm for term, count in counts.items()}


def cosine_relevance(qvec: Dict[str, float], doc: Document) -> float:
    if doc.norm <= 0 or not qvec:
        return 0.0
    dot = 0.0
    for term, q_weight in qvec.items():
        d_weight = doc.vector.get(term)
        if d_weight:
            dot += q_weight * d_weight
    return max(0.0, dot / doc.norm)


def score_query(query: str, index: TFIDFIndex) -> List[QueryMatch]:
    """
    Score every indexed document against a text query.

    Returns:
        List[QueryMatch] sorted by relevance desc (ties keep index order).
        Empty list when the query has no usable tokens.
    """
    qvec = query_vector(query)
    if not qvec:
        return []

    matches = [
        QueryMatch(id=doc.id, recipe=doc.recipe, relevance=cosine_relevance(qvec, doc))
        for doc in index.documents
    ]
    matches.sort(key=lambda m: m.relevance, reverse=True)
    return matches


def explain_tfidf_score(query: str, score: float) -> str:
    """Human-readable band for a relevance score."""
    if score > 0.7:
        return f'Highly relevant match for "{query}"'
    if score > 0.4:
        return f'Moderate match for "{query}"'
    if score > 0.1:
        return f'Some relevance to "{query}"'
    return f'Limited relevance to "{query}"'

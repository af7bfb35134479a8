from .document_store import (
    BatchWrite,
    CollectionPath,
    Document,
    DocumentNotFoundError,
    DocumentPath,
    DocumentStoreError,
    DocumentStoreProtocol,
)
from .identity_provider import IdentityProviderProtocol
from .scoring_oracle import EvaluationResult, ScoringOracleProtocol

__all__ = [
    "BatchWrite",
    "CollectionPath",
    "Document",
    "DocumentNotFoundError",
    "DocumentPath",
    "DocumentStoreError",
    "DocumentStoreProtocol",
    "EvaluationResult",
    "IdentityProviderProtocol",
    "ScoringOracleProtocol",
]

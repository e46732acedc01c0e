"""
Client data cache: REST client plus the per-owner in-memory store.
"""
from .api import PlannerClient
from .store import DataStore, MutationResult

__all__ = ["PlannerClient", "DataStore", "MutationResult"]

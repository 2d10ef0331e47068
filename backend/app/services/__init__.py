"""Validation and persistence policies for the management resources."""
from .merger import MergeRules, MergeValidationError, RequestModel, merge

__all__ = ["MergeRules", "MergeValidationError", "RequestModel", "merge"]

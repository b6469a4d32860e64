"""Safety services package - crisis classification and resources."""

from haven.services.safety.crisis_classifier import CrisisClassifier, DetectorConfig
from haven.services.safety.distress_history import DistressHistoryStore
from haven.services.safety.crisis_resources import CrisisResourceCatalog

__all__ = [
    # Classifier
    "CrisisClassifier",
    "DetectorConfig",
    "DistressHistoryStore",
    # Resources
    "CrisisResourceCatalog",
]

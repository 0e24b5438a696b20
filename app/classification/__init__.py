from app.classification.classifier import Classifier
from app.classification.factory import ClassifierFactory
from app.classification.models import DEFAULT_FOLDERS, UNSORTED, ClassificationPlan

__all__ = [
    "DEFAULT_FOLDERS",
    "UNSORTED",
    "ClassificationPlan",
    "Classifier",
    "ClassifierFactory",
]

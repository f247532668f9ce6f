from .survival_split_view import SurvivalSplitView
from .class_survival_view import ClassSurvivalView
from .sex_survival_view import SexSurvivalView
from .age_distribution_view import AgeDistributionView
from .body_recovery_view import BodyRecoveryView

__all__ = [
    "SurvivalSplitView",
    "ClassSurvivalView",
    "SexSurvivalView",
    "AgeDistributionView",
    "BodyRecoveryView",
]

from .achievement import ACCURACY_CRITERION, Achievement
from .progress_bucket import ProgressBucket

__all__ = ["ACCURACY_CRITERION", "Achievement", "ProgressBucket"]

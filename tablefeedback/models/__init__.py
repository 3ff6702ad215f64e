from .business import Business
from .user import User
from .feedback import Feedback, DEFAULT_LOCATION
from .resolved_alert import ResolvedAlert
from .dining_table import DiningTable

__all__ = ["Business", "User", "Feedback", "DEFAULT_LOCATION", "ResolvedAlert", "DiningTable"]

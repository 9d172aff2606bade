from .math_tools import MathTools
from .date_tools import DateTools, WeekBounds
from .weight_converter import WeightConverter

__all__ = ["MathTools", "DateTools", "WeekBounds", "WeightConverter"]

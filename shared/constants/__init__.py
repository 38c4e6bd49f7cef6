from .charts import ChartMetric
from .environments import Environment
from .ranges import RangeToken

__all__ = ["ChartMetric", "Environment", "RangeToken"]

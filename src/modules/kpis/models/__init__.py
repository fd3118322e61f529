from .kpi import Kpi, KpiType
from .kpi_value import KpiValue

__all__ = ['Kpi', 'KpiType', 'KpiValue']

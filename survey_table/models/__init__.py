"""Domain models for the survey points table.

Inputs (SurveyPoint, ApMapping) are owned by the surrounding application;
FlattenedDisplayRow and TablePage are derived on every render.
"""

from .columns import COLUMNS, COLUMNS_BY_KEY, DEFAULT_VISIBILITY, ColumnSpec
from .config_models import TableConfig
from .display_row import FlattenedDisplayRow
from .survey_point import ApMapping, IperfResults, IperfTestResult, SurveyPoint, WifiData
from .table_page import Pagination, RenderedRow, SortState, TablePage

__all__ = [
    # Inputs
    "SurveyPoint",
    "WifiData",
    "IperfResults",
    "IperfTestResult",
    "ApMapping",
    # Derived
    "FlattenedDisplayRow",
    "TablePage",
    "RenderedRow",
    "Pagination",
    "SortState",
    # Columns / config
    "ColumnSpec",
    "COLUMNS",
    "COLUMNS_BY_KEY",
    "DEFAULT_VISIBILITY",
    "TableConfig",
]

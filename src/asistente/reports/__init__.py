from .charts import ChartData, build_chart, pick_chart_columns
from .exporter import (
    default_export_path,
    export_pdf,
    export_report,
    export_spreadsheet,
)

__all__ = [
    "ChartData",
    "build_chart",
    "default_export_path",
    "export_pdf",
    "export_report",
    "export_spreadsheet",
    "pick_chart_columns",
]

"""Report generation package"""

from nova.reports.call_sheet_generator import CallSheetGenerator

__all__ = [
    "CallSheetGenerator",
]

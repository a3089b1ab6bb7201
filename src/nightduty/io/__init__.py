# nightduty/io - Input/output handling
from .csv_loader import load_personal_requests, load_staff, save_staff
from .excel_export import export_night_schedule_to_excel

__all__ = ["load_staff", "save_staff", "load_personal_requests", "export_night_schedule_to_excel"]

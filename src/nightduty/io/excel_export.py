"""Excel export of the night duty table."""
import io
from pathlib import Path
from typing import BinaryIO, List, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from nightduty.models.schedule import NightSchedule
from nightduty.models.shift import DutyMarker, weekday_label
from nightduty.models.staff import Staff
from nightduty.solver.calendar import Day, build_day_list
from nightduty.solver.stats import stats_to_dict_list

NIGHT_FILL = PatternFill("solid", fgColor="E6CCFF")
WEEKEND_FILL = PatternFill("solid", fgColor="FFE4CC")
HEADER_FILL = PatternFill("solid", fgColor="DDEEFF")

THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)

NIGHT_LABEL = "大夜"


def _days_of(result: NightSchedule) -> List[Day]:
    if not result.dates:
        return []
    return build_day_list(result.dates[0], result.dates[-1])


def _write_matrix_sheet(ws, result: NightSchedule, staff: List[Staff], days: List[Day]):
    """Staff × date sheet with totals."""
    ws.cell(row=1, column=1, value="姓名").font = Font(bold=True)
    ws.cell(row=2, column=1, value="星期").font = Font(bold=True)

    for c, d in enumerate(days, start=2):
        top = ws.cell(row=1, column=c, value=f"{d.date.month}/{d.day}")
        bottom = ws.cell(row=2, column=c, value=weekday_label(d.weekday))
        for cell in (top, bottom):
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal="center")
            cell.fill = WEEKEND_FILL if d.is_weekend else HEADER_FILL
            cell.border = BORDER_THIN

    total_col = len(days) + 2
    ws.cell(row=1, column=total_col, value="合计").font = Font(bold=True)

    scheduled = [s for s in staff if s.staff_id in result.schedule]
    for r, s in enumerate(scheduled, start=3):
        ws.cell(row=r, column=1, value=s.display_name).border = BORDER_THIN
        cells = result.schedule[s.staff_id]
        for c, d in enumerate(days, start=2):
            cell = ws.cell(row=r, column=c)
            cell.border = BORDER_THIN
            cell.alignment = Alignment(horizontal="center")
            if cells.get(d.date_str) == DutyMarker.NIGHT.value:
                cell.value = NIGHT_LABEL
                cell.fill = NIGHT_FILL
        ws.cell(row=r, column=total_col, value=result.stats.staff_night_shift_counts.get(s.staff_id, 0))

    ws.column_dimensions["A"].width = 12
    for c in range(2, total_col):
        ws.column_dimensions[get_column_letter(c)].width = 6
    ws.freeze_panes = "B3"


def _write_summary_sheet(ws, result: NightSchedule, staff: List[Staff]):
    """Quota vs assigned per staff, then the run warnings."""
    rows = stats_to_dict_list(result.stats, staff, result.targets)
    headers = list(rows[0].keys()) if rows else ["工号", "姓名", "性别", "应排", "实排", "差额"]
    for c, h in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=c, value=h)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
    for r, row in enumerate(rows, start=2):
        for c, h in enumerate(headers, start=1):
            ws.cell(row=r, column=c, value=row[h])

    r = len(rows) + 3
    ws.cell(row=r, column=1, value="大夜总数").font = Font(bold=True)
    ws.cell(row=r, column=2, value=result.stats.total_night_shifts)
    if result.stats.errors:
        ws.cell(row=r + 2, column=1, value="提示").font = Font(bold=True)
        for i, msg in enumerate(result.stats.errors, start=r + 3):
            ws.cell(row=i, column=1, value=msg)


def build_workbook(result: NightSchedule, staff: List[Staff]) -> Workbook:
    """Build the two-sheet workbook for a night schedule."""
    wb = Workbook()
    ws = wb.active
    ws.title = "大夜排班"
    _write_matrix_sheet(ws, result, staff, _days_of(result))
    _write_summary_sheet(wb.create_sheet("统计"), result, staff)
    return wb


def export_night_schedule_to_excel(
    result: NightSchedule,
    staff: List[Staff],
    output: Union[str, Path, BinaryIO, None] = None,
) -> bytes:
    """
    Export a night schedule to xlsx.

    Args:
        result: Engine output
        staff: Roster, defines row order
        output: Path or binary buffer; bytes are returned either way

    Returns:
        The xlsx file content
    """
    wb = build_workbook(result, staff)
    buffer = io.BytesIO()
    wb.save(buffer)
    data = buffer.getvalue()

    if isinstance(output, (str, Path)):
        Path(output).write_bytes(data)
    elif output is not None:
        output.write(data)
    return data

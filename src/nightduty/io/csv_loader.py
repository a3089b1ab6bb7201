"""CSV loading and saving for roster and leave data."""
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from nightduty.models.shift import DutyMarker
from nightduty.models.staff import Staff
from nightduty.solver.calendar import format_date, parse_date

ID_COLUMNS = ("staff_id", "staffId", "id")
STAFF_COLUMNS = [
    "staff_id", "name", "gender", "pregnant", "lactating", "cycle_half", "prior_night_days",
]


def _safe_int(value, default: int = 0) -> int:
    """Safely convert value to int."""
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


def _safe_bool(value, default: bool = False) -> bool:
    """Safely convert value to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if value is None:
        return default
    text = str(value).strip().lower()  # numpy scalars land here
    if not text:
        return default
    return text in ("1", "1.0", "true", "yes", "y", "是")


def _read(source: Union[str, Path, pd.DataFrame]) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str)
    return df.fillna("")


def _id_column(df: pd.DataFrame) -> str:
    for col in ID_COLUMNS:
        if col in df.columns:
            return col
    raise ValueError("CSV must have a 'staff_id' column")


def load_staff(source: Union[str, Path, pd.DataFrame]) -> List[Staff]:
    """
    Load roster from CSV file or DataFrame.

    Args:
        source: Path to CSV file or pandas DataFrame

    Returns:
        List of Staff objects (rows with a blank id are skipped)
    """
    df = _read(source)
    id_col = _id_column(df)

    staff = []
    for _, row in df.iterrows():
        staff_id = str(row[id_col]).strip()
        if not staff_id:
            continue
        record = {
            "staff_id": staff_id,
            "name": str(row.get("name", "")).strip(),
            "gender": str(row.get("gender", "")).strip(),
            "pregnant": _safe_bool(row.get("pregnant", row.get("isPregnant"))),
            "lactating": _safe_bool(row.get("lactating", row.get("isLactating"))),
            "cycle_half": str(row.get("cycle_half", row.get("menstrualPeriod", ""))).strip(),
            "prior_night_days": _safe_int(
                row.get("prior_night_days", row.get("lastMonthNightShiftDays")), 0
            ),
        }
        staff.append(Staff.from_dict(record))
    return staff


def save_staff(staff: List[Staff], path: Union[str, Path]) -> None:
    """
    Save roster to CSV file.

    Args:
        staff: List of Staff objects
        path: Output path
    """
    if not staff:
        df = pd.DataFrame(columns=STAFF_COLUMNS)
    else:
        df = pd.DataFrame([s.to_dict() for s in staff], columns=STAFF_COLUMNS)

    # Convert bools to 1/0 for CSV
    for col in ["pregnant", "lactating"]:
        if col in df.columns:
            df[col] = df[col].astype(int)

    df.to_csv(path, index=False)


def load_personal_requests(source: Union[str, Path, pd.DataFrame]) -> Dict[str, Dict[str, str]]:
    """
    Load leave requests from a long table with staff_id and date columns.

    Returns:
        {staff_id: {date_str: "REQ"}}
    """
    df = _read(source)
    id_col = _id_column(df)
    if "date" not in df.columns:
        raise ValueError("CSV must have a 'date' column")

    requests: Dict[str, Dict[str, str]] = {}
    for _, row in df.iterrows():
        staff_id = str(row[id_col]).strip()
        d = parse_date(row["date"])
        if not staff_id or d is None:
            continue
        requests.setdefault(staff_id, {})[format_date(d)] = DutyMarker.REQUEST.value
    return requests


def staff_to_dataframe(staff: List[Staff]) -> pd.DataFrame:
    """Convert roster to DataFrame for display."""
    if not staff:
        return pd.DataFrame(columns=STAFF_COLUMNS)
    return pd.DataFrame([s.to_dict() for s in staff], columns=STAFF_COLUMNS)

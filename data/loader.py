"""File upload parsing: CSV/XLSX sheets and content-store JSON exports into typed models."""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from models.route import RouteDeclaration
from models.rolling_stock import Coach, TravelClass, CoachAssignment, Train
from config.defaults import DEFAULT_AUTO_BACK_FILL

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "yes", "y", "1", "on"}
_FALSE_STRINGS = {"false", "no", "n", "0", "off", ""}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def to_optional_int(value: Any) -> Optional[int]:
    """Blank cells and 0 stay distinguishable: blank -> None, "0" -> 0."""
    if _is_blank(value):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise ValueError(f"Not a seat number: {value!r}") from None


def to_bool(value: Any, default: bool) -> bool:
    if _is_blank(value):
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"Not a yes/no value: {value!r}")
    return bool(value)


def to_text(value: Any) -> str:
    return "" if _is_blank(value) else str(value).strip()


def to_id(value: Any) -> str:
    """Identifier text; spreadsheet numbers like 12.0 become "12"."""
    if isinstance(value, float) and not _is_blank(value) and value.is_integer():
        return str(int(value))
    return to_text(value)


def _get(row, column: str) -> Any:
    return row[column] if column in row.index else None


def parse_coaches(df: pd.DataFrame) -> List[Coach]:
    """Convert a coaches DataFrame into Coach objects."""
    coaches = []
    for _, row in df.iterrows():
        coaches.append(Coach(
            coach_code=to_text(row["Coach Code"]).upper(),
            total_seats=to_optional_int(row["Total Seats"]) or 0,
            front_start=to_optional_int(_get(row, "Front Start")),
            front_end=to_optional_int(_get(row, "Front End")),
            back_start=to_optional_int(_get(row, "Back Start")),
            back_end=to_optional_int(_get(row, "Back End")),
            auto_back_fill=to_bool(_get(row, "Auto Back Fill"), DEFAULT_AUTO_BACK_FILL),
        ))
    return coaches


def parse_travel_classes(df: pd.DataFrame) -> List[TravelClass]:
    """Convert a travel classes DataFrame into TravelClass objects."""
    classes = []
    for _, row in df.iterrows():
        classes.append(TravelClass(
            class_name=to_text(row["Class Name"]),
            short_code=to_text(row["Short Code"]).upper(),
            default_total_seats=to_optional_int(_get(row, "Default Total Seats")),
            default_front_start=to_optional_int(_get(row, "Default Front Start")),
            default_front_end=to_optional_int(_get(row, "Default Front End")),
            default_back_start=to_optional_int(_get(row, "Default Back Start")),
            default_back_end=to_optional_int(_get(row, "Default Back End")),
            default_auto_back_fill=to_bool(_get(row, "Default Auto Back Fill"), DEFAULT_AUTO_BACK_FILL),
        ))
    return classes


def parse_assignments(df: pd.DataFrame) -> Dict[str, List[CoachAssignment]]:
    """Convert a train coaches DataFrame into assignments grouped by train ID.

    Positions are numbered in sheet order within each train, starting at 1.
    """
    grouped: Dict[str, List[CoachAssignment]] = {}
    for _, row in df.iterrows():
        train_id = to_id(row["Train ID"])
        assignments = grouped.setdefault(train_id, [])
        auto = _get(row, "Override Auto Back Fill")
        assignments.append(CoachAssignment(
            coach_code=to_text(row["Coach Code"]).upper(),
            class_short_code=to_text(row["Class Short Code"]).upper(),
            position=len(assignments) + 1,
            override_enabled=to_bool(_get(row, "Override Seats"), False),
            total_seats=to_optional_int(_get(row, "Override Total Seats")),
            front_start=to_optional_int(_get(row, "Override Front Start")),
            front_end=to_optional_int(_get(row, "Override Front End")),
            back_start=to_optional_int(_get(row, "Override Back Start")),
            back_end=to_optional_int(_get(row, "Override Back End")),
            auto_back_fill=None if _is_blank(auto) else to_bool(auto, DEFAULT_AUTO_BACK_FILL),
        ))
    return grouped


def parse_trains(df: pd.DataFrame, assignments_df: Optional[pd.DataFrame] = None) -> List[Train]:
    """Convert a trains DataFrame into Train objects, attaching coach assignments if given."""
    assignments = parse_assignments(assignments_df) if assignments_df is not None else {}
    trains = []
    for _, row in df.iterrows():
        train_id = to_id(row["Train ID"])
        trains.append(Train(
            train_id=train_id,
            train_name=to_text(row["Train Name"]),
            route=RouteDeclaration(
                origin_station=to_text(row["Origin Station"]),
                destination_station=to_text(row["Destination Station"]),
                code_from_to=to_id(_get(row, "Code From To")),
                code_to_from=to_id(_get(row, "Code To From")),
            ),
            assignments=assignments.get(train_id, []),
        ))
    return trains


# --- Content store JSON export (native field names) ---

def _records(value: Any, label: str) -> List[Dict[str, Any]]:
    """A list of JSON objects; anything else is a malformed export."""
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(r, dict) for r in value):
        raise ValueError(f"Content export: {label} must be a list of objects")
    return value


def coach_from_record(record: Dict[str, Any]) -> Coach:
    return Coach(
        coach_code=(to_text(record.get("coach_code")) or to_text(record.get("title"))).upper(),
        total_seats=to_optional_int(record.get("total_seats")) or 0,
        front_start=to_optional_int(record.get("front_start")),
        front_end=to_optional_int(record.get("front_end")),
        back_start=to_optional_int(record.get("back_start")),
        back_end=to_optional_int(record.get("back_end")),
        auto_back_fill=to_bool(record.get("auto_back_fill"), DEFAULT_AUTO_BACK_FILL),
    )


def travel_class_from_record(record: Dict[str, Any]) -> TravelClass:
    return TravelClass(
        class_name=to_text(record.get("title")) or to_text(record.get("class_name")),
        short_code=to_text(record.get("short_code")).upper(),
        default_total_seats=to_optional_int(record.get("default_total_seats")),
        default_front_start=to_optional_int(record.get("default_front_start")),
        default_front_end=to_optional_int(record.get("default_front_end")),
        default_back_start=to_optional_int(record.get("default_back_start")),
        default_back_end=to_optional_int(record.get("default_back_end")),
        default_auto_back_fill=to_bool(record.get("default_auto_back_fill"), DEFAULT_AUTO_BACK_FILL),
    )


def train_from_record(
    record: Dict[str, Any],
    coach_codes_by_id: Optional[Dict[str, str]] = None,
    class_codes_by_id: Optional[Dict[str, str]] = None,
) -> Train:
    """Map a train record; coach_ref / class_ref ids are translated through the lookup tables."""
    coach_codes_by_id = coach_codes_by_id or {}
    class_codes_by_id = class_codes_by_id or {}

    assignments = []
    for class_data in _records(record.get("train_classes"), "train_classes"):
        class_ref = to_id(class_data.get("class_ref"))
        class_code = class_codes_by_id.get(class_ref) or to_text(class_data.get("class_short")).upper()
        for coach_data in _records(class_data.get("coaches"), "train_classes[].coaches"):
            coach_ref = to_id(coach_data.get("coach_ref"))
            coach_code = coach_codes_by_id.get(coach_ref) or to_text(coach_data.get("coach_code")).upper()
            if not coach_code:
                logger.warning("Skipping coach reference %r with no known coach code", coach_ref)
                continue
            auto = coach_data.get("auto_back_fill")
            assignments.append(CoachAssignment(
                coach_code=coach_code,
                class_short_code=class_code,
                position=len(assignments) + 1,
                override_enabled=to_bool(coach_data.get("override_seats"), False),
                total_seats=to_optional_int(coach_data.get("total_seats")),
                front_start=to_optional_int(coach_data.get("front_start")),
                front_end=to_optional_int(coach_data.get("front_end")),
                back_start=to_optional_int(coach_data.get("back_start")),
                back_end=to_optional_int(coach_data.get("back_end")),
                auto_back_fill=None if _is_blank(auto) else to_bool(auto, DEFAULT_AUTO_BACK_FILL),
            ))

    direction = to_text(record.get("direction")).lower() or None
    return Train(
        train_id=to_id(record.get("id")),
        train_name=to_text(record.get("title")) or to_text(record.get("train_name")),
        route=RouteDeclaration(
            origin_station=to_text(record.get("origin_station")),
            destination_station=to_text(record.get("destination_station")),
            code_from_to=to_id(record.get("code_from_to")),
            code_to_from=to_id(record.get("code_to_from")),
            direction_hint=direction,
            is_reverse_direction=to_bool(record.get("is_reverse_direction"), False),
        ),
        assignments=assignments,
    )


def parse_cms_export(payload: Dict[str, Any]) -> Tuple[List[Train], List[Coach], List[TravelClass]]:
    """Parse {"trains": [...], "coaches": [...], "travel_classes": [...]} from the content store."""
    coach_records = _records(payload.get("coaches"), "coaches")
    class_records = _records(payload.get("travel_classes"), "travel_classes")

    coaches = [coach_from_record(r) for r in coach_records]
    classes = [travel_class_from_record(r) for r in class_records]

    coach_codes_by_id = {to_id(r.get("id")): c.coach_code for r, c in zip(coach_records, coaches) if r.get("id") is not None}
    class_codes_by_id = {to_id(r.get("id")): c.short_code for r, c in zip(class_records, classes) if r.get("id") is not None}

    trains = [
        train_from_record(r, coach_codes_by_id, class_codes_by_id)
        for r in _records(payload.get("trains"), "trains")
    ]
    return trains, coaches, classes


def load_cms_export(uploaded_file) -> Tuple[List[Train], List[Coach], List[TravelClass]]:
    """Load a JSON export file (path or file-like) from the content store."""
    if isinstance(uploaded_file, str):
        with open(uploaded_file, encoding="utf-8") as fh:
            payload = json.load(fh)
    else:
        raw = uploaded_file.read()
        payload = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
    if not isinstance(payload, dict):
        raise ValueError("Content export must be a JSON object with trains, coaches and travel_classes")
    return parse_cms_export(payload)


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


# Expected sheet names for multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    "coaches": ["coaches", "coach", "coach master", "coach templates"],
    "travel_classes": ["travel classes", "travel class", "classes", "class", "class defaults"],
    "trains": ["trains", "train", "train master", "routes"],
    "train_coaches": ["train coaches", "train coach", "assignments", "formation", "train formation"],
}


def _match_sheet(sheet_names: List[str], category: str) -> str:
    """Find a sheet name matching the given category. Returns the matched name or raises."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_multi_sheet_excel(uploaded_file) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Load a single Excel file with 4 tabs: Coaches, Travel Classes, Trains, Train Coaches.

    Returns (coaches_df, travel_classes_df, trains_df, train_coaches_df).
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    frames = []
    for category in ("coaches", "travel_classes", "trains", "train_coaches"):
        sheet = _match_sheet(sheet_names, category)
        frames.append(pd.read_excel(xl, sheet_name=sheet))

    return tuple(frames)

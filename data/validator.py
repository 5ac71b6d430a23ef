"""Schema and seat-range validation for uploaded data files."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pandas as pd


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.is_valid = self.is_valid and other.is_valid
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


COACH_REQUIRED_COLUMNS = [
    "Coach Code",
    "Total Seats",
]

TRAVEL_CLASS_REQUIRED_COLUMNS = [
    "Class Name",
    "Short Code",
]

TRAIN_REQUIRED_COLUMNS = [
    "Train ID",
    "Train Name",
    "Origin Station",
    "Destination Station",
    "Code From To",
    "Code To From",
]

TRAIN_COACH_REQUIRED_COLUMNS = [
    "Train ID",
    "Class Short Code",
    "Coach Code",
]

# (total, front start, front end, back start, back end) column names per sheet
COACH_RANGE_COLUMNS = ("Total Seats", "Front Start", "Front End", "Back Start", "Back End")
CLASS_RANGE_COLUMNS = ("Default Total Seats", "Default Front Start", "Default Front End",
                       "Default Back Start", "Default Back End")
OVERRIDE_RANGE_COLUMNS = ("Override Total Seats", "Override Front Start", "Override Front End",
                          "Override Back Start", "Override Back End")


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _numeric(df: pd.DataFrame, column: str) -> Optional[pd.Series]:
    if column not in df.columns:
        return None
    return pd.to_numeric(df[column], errors="coerce")


def _check_numeric_columns(df: pd.DataFrame, columns: Tuple[str, ...], file_label: str,
                           result: ValidationResult) -> None:
    for column in columns:
        if column not in df.columns:
            continue
        raw = df[column]
        coerced = pd.to_numeric(raw, errors="coerce")
        bad = raw.notna() & coerced.isna() & (raw.astype(str).str.strip() != "")
        if bad.any():
            result.is_valid = False
            result.errors.append(f"{file_label}: {column} must be a number (rows {_row_numbers(bad)}).")
        if (coerced < 0).any():
            result.is_valid = False
            result.errors.append(f"{file_label}: {column} cannot be negative.")


def _row_numbers(mask: pd.Series) -> str:
    # 1-based data rows as a spreadsheet user counts them (header excluded)
    return ", ".join(str(i + 1) for i in mask[mask].index.tolist())


def _check_ranges(df: pd.DataFrame, columns: Tuple[str, ...], label_column: str,
                  file_label: str, result: ValidationResult,
                  row_mask: Optional[pd.Series] = None) -> None:
    """Range sanity per row: start <= end, ranges inside total, front/back do not overlap."""
    total_col, fs_col, fe_col, bs_col, be_col = columns
    total = _numeric(df, total_col)
    fs, fe = _numeric(df, fs_col), _numeric(df, fe_col)
    bs, be = _numeric(df, bs_col), _numeric(df, be_col)

    for idx in df.index:
        if row_mask is not None and not row_mask.loc[idx]:
            continue
        label = df.at[idx, label_column] if label_column in df.columns else idx + 1
        ranges = {}
        for name, start, end in (("front", fs, fe), ("back", bs, be)):
            if start is None or end is None:
                continue
            s, e = start.loc[idx], end.loc[idx]
            if pd.isna(s) or pd.isna(e) or s == 0 or e == 0:
                continue
            if e < s:
                result.is_valid = False
                result.errors.append(f"{file_label}: {label} {name} range ends before it starts ({int(s)}-{int(e)}).")
                continue
            t = total.loc[idx] if total is not None else None
            if t is not None and not pd.isna(t) and t > 0 and e > t:
                result.is_valid = False
                result.errors.append(
                    f"{file_label}: {label} {name} range {int(s)}-{int(e)} exceeds {int(t)} seats."
                )
            ranges[name] = (s, e)
        if "front" in ranges and "back" in ranges:
            (f1, f2), (b1, b2) = ranges["front"], ranges["back"]
            if f1 <= b2 and b1 <= f2:
                result.is_valid = False
                result.errors.append(
                    f"{file_label}: {label} front range {int(f1)}-{int(f2)} overlaps "
                    f"back range {int(b1)}-{int(b2)}."
                )


def validate_coaches(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, COACH_REQUIRED_COLUMNS, "Coaches")
    if not result.is_valid:
        return result

    _check_numeric_columns(df, COACH_RANGE_COLUMNS, "Coaches", result)
    if not result.is_valid:
        return result

    codes = df["Coach Code"].astype(str).str.strip().str.upper()
    dupes = codes.duplicated(keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Coaches: Duplicate coach codes: {sorted(codes[dupes].unique().tolist())}")

    totals = pd.to_numeric(df["Total Seats"], errors="coerce").fillna(0)
    no_seats = codes[totals == 0].tolist()
    if no_seats:
        result.warnings.append(
            f"Coaches without a seat count: {', '.join(no_seats)}. "
            "Their travel class defaults will be used."
        )

    _check_ranges(df, COACH_RANGE_COLUMNS, "Coach Code", "Coaches", result)
    return result


def validate_travel_classes(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, TRAVEL_CLASS_REQUIRED_COLUMNS, "Travel Classes")
    if not result.is_valid:
        return result

    _check_numeric_columns(df, CLASS_RANGE_COLUMNS, "Travel Classes", result)
    if not result.is_valid:
        return result

    codes = df["Short Code"].astype(str).str.strip().str.upper()
    dupes = codes.duplicated(keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Travel Classes: Duplicate short codes: {sorted(codes[dupes].unique().tolist())}")

    _check_ranges(df, CLASS_RANGE_COLUMNS, "Short Code", "Travel Classes", result)
    return result


def validate_trains(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, TRAIN_REQUIRED_COLUMNS, "Trains")
    if not result.is_valid:
        return result

    ids = df["Train ID"].astype(str).str.strip()
    dupes = ids.duplicated(keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Trains: Duplicate train IDs: {sorted(ids[dupes].unique().tolist())}")

    same = (df["Origin Station"].astype(str).str.strip().str.lower()
            == df["Destination Station"].astype(str).str.strip().str.lower())
    if same.any():
        result.is_valid = False
        result.errors.append(f"Trains: Origin equals destination for train IDs {ids[same].tolist()}.")

    for code_col in ("Code From To", "Code To From"):
        missing = df[code_col].isna() | (df[code_col].astype(str).str.strip() == "")
        if missing.any():
            result.warnings.append(f"Trains: {code_col} is empty for train IDs {ids[missing].tolist()}.")

    from_to = df["Code From To"].astype(str).str.strip()
    to_from = df["Code To From"].astype(str).str.strip()
    identical = (from_to == to_from) & (from_to != "") & df["Code From To"].notna()
    if identical.any():
        result.warnings.append(
            f"Trains: both route codes are identical for train IDs {ids[identical].tolist()}; "
            "the reverse leg cannot be told apart by code."
        )
    return result


def validate_train_coaches(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, TRAIN_COACH_REQUIRED_COLUMNS, "Train Coaches")
    if not result.is_valid:
        return result

    _check_numeric_columns(df, OVERRIDE_RANGE_COLUMNS, "Train Coaches", result)
    if not result.is_valid:
        return result

    if "Override Seats" in df.columns:
        flag = df["Override Seats"].astype(str).str.strip().str.lower().isin(["true", "yes", "y", "1", "1.0", "on"])
        totals = _numeric(df, "Override Total Seats")
        if totals is not None:
            empty_override = flag & (totals.isna() | (totals == 0))
        else:
            empty_override = flag
        if empty_override.any():
            coaches = df.loc[empty_override, "Coach Code"].astype(str).tolist()
            result.warnings.append(
                f"Train Coaches: override enabled without an override seat count for {coaches}; "
                "the coach's own template will be used."
            )
        _check_ranges(df, OVERRIDE_RANGE_COLUMNS, "Coach Code", "Train Coaches", result, row_mask=flag)

    return result


def validate_cross_file(
    coaches_df: pd.DataFrame,
    travel_classes_df: pd.DataFrame,
    trains_df: pd.DataFrame,
    train_coaches_df: pd.DataFrame,
) -> ValidationResult:
    """Check that assignments reference known trains, coaches and classes."""
    result = ValidationResult()
    coach_codes = set(coaches_df["Coach Code"].astype(str).str.strip().str.upper())
    class_codes = set(travel_classes_df["Short Code"].astype(str).str.strip().str.upper())
    train_ids = set(trains_df["Train ID"].astype(str).str.strip())

    assigned_coaches = set(train_coaches_df["Coach Code"].astype(str).str.strip().str.upper())
    assigned_classes = set(train_coaches_df["Class Short Code"].astype(str).str.strip().str.upper())
    assigned_trains = set(train_coaches_df["Train ID"].astype(str).str.strip())

    unknown_coaches = assigned_coaches - coach_codes
    unknown_classes = assigned_classes - class_codes
    unknown_trains = assigned_trains - train_ids
    trains_without_coaches = train_ids - assigned_trains

    if unknown_coaches:
        result.warnings.append(
            f"Assignments reference unknown coaches: {', '.join(sorted(unknown_coaches))}. "
            "Travel class defaults will be used where available."
        )
    if unknown_classes:
        result.warnings.append(
            f"Assignments reference unknown travel classes: {', '.join(sorted(unknown_classes))}."
        )
    if unknown_trains:
        result.warnings.append(
            f"Assignments for unknown train IDs: {', '.join(sorted(unknown_trains))}. "
            "These will be ignored."
        )
    if trains_without_coaches:
        result.warnings.append(
            f"Trains without coaches: {', '.join(sorted(trains_without_coaches))}. "
            "The fallback coach table will be shown for them."
        )
    return result

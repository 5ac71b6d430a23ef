"""Sample datasets for the Seat Direction Guide, and the fallback coach table."""

import os

import pandas as pd

from models.rolling_stock import FallbackCoach
from models.template import SeatRange


# Used only when a train has no coach data upstream; passed into the assembler explicitly.
FALLBACK_COACHES = (
    FallbackCoach("CHA", "S_CHAIR", 60, SeatRange(1, 30), SeatRange(31, 60), True),
    FallbackCoach("SCHA", "S_CHAIR", 60, SeatRange(31, 60), SeatRange(1, 30), True),
    FallbackCoach("UMA", "S_CHAIR", 48, SeatRange(1, 48), None, False),
    FallbackCoach("JA", "S_CHAIR", 48, None, SeatRange(1, 48), False),
)


def generate_coaches_df() -> pd.DataFrame:
    """Coach master: one row per physical coach layout."""
    rows = [
        {"Coach Code": "CHA",  "Total Seats": 60, "Front Start": 1,    "Front End": 30,   "Back Start": None, "Back End": None, "Auto Back Fill": True},
        {"Coach Code": "SCHA", "Total Seats": 60, "Front Start": 31,   "Front End": 60,   "Back Start": 1,    "Back End": 30,   "Auto Back Fill": True},
        {"Coach Code": "UMA",  "Total Seats": 48, "Front Start": 1,    "Front End": 24,   "Back Start": 25,   "Back End": 48,   "Auto Back Fill": False},
        {"Coach Code": "KA",   "Total Seats": 55, "Front Start": 1,    "Front End": 25,   "Back Start": None, "Back End": None, "Auto Back Fill": True},
        {"Coach Code": "GHA",  "Total Seats": 60, "Front Start": 1,    "Front End": 30,   "Back Start": 31,   "Back End": 50,   "Auto Back Fill": False},
        {"Coach Code": "JA",   "Total Seats": 0,  "Front Start": None, "Front End": None, "Back Start": None, "Back End": None, "Auto Back Fill": True},
    ]
    return pd.DataFrame(rows)


def generate_travel_classes_df() -> pd.DataFrame:
    """Travel classes with their default seat templates."""
    rows = [
        {"Class Name": "Shovan Chair", "Short Code": "S_CHAIR", "Default Total Seats": 60, "Default Front Start": 1,
         "Default Front End": 30, "Default Back Start": None, "Default Back End": None, "Default Auto Back Fill": True},
        {"Class Name": "Snigdha", "Short Code": "SNIGDHA", "Default Total Seats": 55, "Default Front Start": 1,
         "Default Front End": 25, "Default Back Start": None, "Default Back End": None, "Default Auto Back Fill": True},
        {"Class Name": "AC Seat", "Short Code": "AC_S", "Default Total Seats": 48, "Default Front Start": 1,
         "Default Front End": 24, "Default Back Start": None, "Default Back End": None, "Default Auto Back Fill": True},
    ]
    return pd.DataFrame(rows)


def generate_trains_df() -> pd.DataFrame:
    """Trains with their fixed route declaration."""
    rows = [
        {"Train ID": "1", "Train Name": "Demo Line",          "Origin Station": "Dhaka", "Destination Station": "Panchagarh", "Code From To": "101", "Code To From": "103"},
        {"Train ID": "2", "Train Name": "Panchagarh Express", "Origin Station": "Dhaka", "Destination Station": "Panchagarh", "Code From To": "793", "Code To From": "794"},
        {"Train ID": "3", "Train Name": "Silk City Express",  "Origin Station": "Dhaka", "Destination Station": "Rajshahi",   "Code From To": "753", "Code To From": "754"},
    ]
    return pd.DataFrame(rows)


def generate_train_coaches_df() -> pd.DataFrame:
    """Coach assignments per train and class, with one per-train override."""
    plain = {"Override Seats": False, "Override Total Seats": None, "Override Front Start": None,
             "Override Front End": None, "Override Back Start": None, "Override Back End": None,
             "Override Auto Back Fill": None}
    rows = [
        {"Train ID": "1", "Class Short Code": "S_CHAIR", "Coach Code": "CHA", **plain},
        {"Train ID": "1", "Class Short Code": "S_CHAIR", "Coach Code": "SCHA", **plain},
        {"Train ID": "1", "Class Short Code": "AC_S", "Coach Code": "UMA", **plain},
        {"Train ID": "2", "Class Short Code": "S_CHAIR", "Coach Code": "CHA", **plain},
        {"Train ID": "2", "Class Short Code": "S_CHAIR", "Coach Code": "JA", **plain},
        {"Train ID": "2", "Class Short Code": "SNIGDHA", "Coach Code": "KA", **plain},
        {"Train ID": "2", "Class Short Code": "S_CHAIR", "Coach Code": "GHA", **plain},
        {"Train ID": "3", "Class Short Code": "S_CHAIR", "Coach Code": "CHA", **plain},
        {"Train ID": "3", "Class Short Code": "SNIGDHA", "Coach Code": "KA",
         "Override Seats": True, "Override Total Seats": 50, "Override Front Start": 1,
         "Override Front End": 25, "Override Back Start": None, "Override Back End": None,
         "Override Auto Back Fill": True},
    ]
    return pd.DataFrame(rows)


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_coaches_df().to_csv(os.path.join(output_dir, "coaches.csv"), index=False)
    generate_travel_classes_df().to_csv(os.path.join(output_dir, "travel_classes.csv"), index=False)
    generate_trains_df().to_csv(os.path.join(output_dir, "trains.csv"), index=False)
    generate_train_coaches_df().to_csv(os.path.join(output_dir, "train_coaches.csv"), index=False)


def generate_sample_excel(output_dir: str):
    """Write a single multi-tab Excel file with all four datasets."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_data.xlsx")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_coaches_df().to_excel(writer, sheet_name="Coaches", index=False)
        generate_travel_classes_df().to_excel(writer, sheet_name="Travel Classes", index=False)
        generate_trains_df().to_excel(writer, sheet_name="Trains", index=False)
        generate_train_coaches_df().to_excel(writer, sheet_name="Train Coaches", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")

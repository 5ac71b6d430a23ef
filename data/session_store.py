"""Typed wrapper around st.session_state for application data."""

import copy
from typing import Dict, List, Optional

import streamlit as st

from models.rolling_stock import Coach, TravelClass, Train
from config.defaults import DEFAULT_RULE_CONFIG


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "trains": [],
        "coaches": [],
        "travel_classes": [],
        "data_loaded": False,
        "data_source": "",
        "rule_config": copy.deepcopy(DEFAULT_RULE_CONFIG),
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_trains() -> List[Train]:
    return st.session_state.get("trains", [])


def get_train(train_id: str) -> Optional[Train]:
    return next((t for t in get_trains() if t.train_id == train_id), None)


def get_coaches() -> List[Coach]:
    return st.session_state.get("coaches", [])


def get_travel_classes() -> List[TravelClass]:
    return st.session_state.get("travel_classes", [])


def get_rule_config() -> dict:
    return st.session_state.get("rule_config", {})


def get_data_source() -> str:
    return st.session_state.get("data_source", "")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_dataset(trains: List[Train], coaches: List[Coach], travel_classes: List[TravelClass], source: str):
    st.session_state["trains"] = trains
    st.session_state["coaches"] = coaches
    st.session_state["travel_classes"] = travel_classes
    st.session_state["data_source"] = source
    st.session_state["data_loaded"] = True


def clear_dataset():
    for key in ("trains", "coaches", "travel_classes"):
        st.session_state[key] = []
    st.session_state["data_source"] = ""
    st.session_state["data_loaded"] = False


def set_rule_config(config: dict):
    st.session_state["rule_config"] = config


def reset_rule_config():
    st.session_state["rule_config"] = copy.deepcopy(DEFAULT_RULE_CONFIG)


def dataset_counts() -> Dict[str, int]:
    return {
        "trains": len(get_trains()),
        "coaches": len(get_coaches()),
        "travel_classes": len(get_travel_classes()),
    }

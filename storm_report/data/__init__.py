"""Data download, loading, classification, and in-memory event store."""
from .download import dataset_path, fetch_dataset
from .loader import load_raw_csv, load_events, prepare_events
from .store import EventStore
from .schemas import YearRange
from .normalize import normalize_columns, decode_exponent, exponent_multiplier, add_damage_columns
from .classify import classify_event_type, assign_categories, uncategorized_pct, uncategorized_labels

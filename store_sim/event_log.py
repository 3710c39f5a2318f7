"""
Event logging for the store simulation.
Keeps an in-memory log and optionally mirrors it to CSV.
"""

import csv
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import List, Optional
import pandas as pd
import config


@dataclass
class Event:
    """Represents a single thing that happened at a lane during a minute."""
    minute: int
    event_type: str  # "joined", "worker_assigned", "stalled", "in_service", "completed"
    customer_number: int
    lane: int
    item_count: Optional[int] = None
    remaining_time: Optional[float] = None


class EventLog:
    """Manages event logging to CSV and in-memory storage."""

    def __init__(self, output_dir: Optional[str] = None, run_id: str = "default"):
        """Initialize event logger.

        Args:
            output_dir: Directory to store CSV logs, None to keep events in memory only
            run_id: Identifier for this run (used in filename)
        """
        self.run_id = run_id
        self.events: List[Event] = []
        self.csv_path: Optional[Path] = None

        if output_dir is not None:
            out = Path(output_dir)
            out.mkdir(parents=True, exist_ok=True)
            self.csv_path = out / f"events_{run_id}.csv"
            self._init_csv()

    def _init_csv(self):
        """Initialize CSV file with header."""
        with open(self.csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=config.EVENT_LOG_COLUMNS)
            writer.writeheader()

    def log_event(self, event: Event):
        """Log a single event to memory and, if enabled, CSV.

        Args:
            event: Event object to log
        """
        self.events.append(event)

        if self.csv_path is not None:
            with open(self.csv_path, "a", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=config.EVENT_LOG_COLUMNS)
                writer.writerow(asdict(event))

    def get_dataframe(self) -> pd.DataFrame:
        """Return in-memory events as pandas DataFrame."""
        if not self.events:
            return pd.DataFrame(columns=config.EVENT_LOG_COLUMNS)

        return pd.DataFrame([asdict(e) for e in self.events])

    def get_events_for_minute(self, minute: int) -> List[Event]:
        return [e for e in self.events if e.minute == minute]

    def get_joins(self) -> List[Event]:
        """Get all customer arrival events."""
        return [e for e in self.events if e.event_type == "joined"]

    def get_completions(self) -> List[Event]:
        """Get all checkout completion events."""
        return [e for e in self.events if e.event_type == "completed"]

    def get_stalls(self) -> List[Event]:
        """Get all events where a customer waited for a free worker."""
        return [e for e in self.events if e.event_type == "stalled"]

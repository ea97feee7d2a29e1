"""
Bounded History Storage

Time-windowed snapshot history and a fixed-size alarm log. The history keeps
only snapshots within the trailing window of simulated time and can be
exported to a pandas DataFrame for analysis or CSV export.
"""

from collections import deque
from dataclasses import asdict
from enum import Enum
from typing import Iterable, Iterator, List, Optional

import pandas as pd

from .alarms import AlarmEvent, AlarmLevel


class ReactorHistory:
    """Snapshots retained over a trailing window of simulated time"""

    def __init__(self, window: float = 600.0):
        self.window = window
        self._entries = deque()

    def append(self, entry) -> None:
        """Add a snapshot and evict entries older than the window"""
        self._entries.append(entry)
        cutoff = entry.t - self.window
        while self._entries and self._entries[0].t < cutoff:
            self._entries.popleft()

    def latest(self):
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the history as a DataFrame

        Returns:
            One row per snapshot, columns named after the snapshot fields
        """
        rows = []
        for entry in self._entries:
            row = asdict(entry)
            row = {k: (v.value if isinstance(v, Enum) else v) for k, v in row.items()}
            rows.append(row)
        return pd.DataFrame(rows)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator:
        return iter(self._entries)

    def __getitem__(self, index):
        return self._entries[index]


class AlarmLog:
    """Most recent alarms, oldest evicted first"""

    def __init__(self, maxlen: int = 10):
        self._alarms = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._alarms.maxlen

    def extend(self, alarms: Iterable[AlarmEvent]) -> None:
        self._alarms.extend(alarms)

    def latest(self) -> Optional[AlarmEvent]:
        return self._alarms[-1] if self._alarms else None

    def trips(self) -> List[AlarmEvent]:
        """TRIP-level alarms still in the log"""
        return [alarm for alarm in self._alarms if alarm.level is AlarmLevel.TRIP]

    def clear(self) -> None:
        self._alarms.clear()

    def __len__(self) -> int:
        return len(self._alarms)

    def __iter__(self) -> Iterator:
        return iter(self._alarms)

    def __getitem__(self, index):
        return self._alarms[index]

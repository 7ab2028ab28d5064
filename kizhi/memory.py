"""Variable store — name → integer value plus the line that last wrote it."""

from __future__ import annotations

import logging

from .sink import LineSink
from .vm_types import VariableRecord
from . import constants

logger = logging.getLogger(__name__)


class VariableStore:
    """Flat variable map shared by top-level code and every function body.

    Operations on an undeclared name (other than ``set``) emit the
    missing-variable diagnostic to the sink and leave the store unchanged.
    """

    def __init__(
        self,
        sink: LineSink,
        missing_message: str = constants.MISSING_VARIABLE_MESSAGE,
    ):
        self._sink = sink
        self._missing_message = missing_message
        self._records: dict[str, VariableRecord] = {}

    def set(self, line: int, name: str, value: int) -> None:
        record = self._records.get(name)
        if record is None:
            self._records[name] = VariableRecord(value=value, last_changed_line=line)
            return
        record.value = value
        record.last_changed_line = line

    def sub(self, line: int, name: str, amount: int) -> None:
        record = self._records.get(name)
        if record is None:
            self._report_missing(name)
            return
        record.value -= amount
        record.last_changed_line = line

    def print_value(self, name: str) -> None:
        record = self._records.get(name)
        if record is None:
            self._report_missing(name)
            return
        self._sink.write_line(str(record.value))

    def remove(self, name: str) -> None:
        if name not in self._records:
            self._report_missing(name)
            return
        del self._records[name]

    def dump(self) -> None:
        """Emit one line per variable, in insertion order."""
        for name, record in self._records.items():
            self._sink.write_line(
                constants.MEMORY_LINE_TEMPLATE.format(
                    name=name, value=record.value, line=record.last_changed_line
                )
            )

    def get(self, name: str) -> VariableRecord | None:
        return self._records.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def to_dict(self) -> dict:
        return {name: record.to_dict() for name, record in self._records.items()}

    def _report_missing(self, name: str) -> None:
        logger.debug("Variable %s is not in memory", name)
        self._sink.write_line(self._missing_message)

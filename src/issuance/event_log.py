"""EventLog — журнал записей эмитента (Minted/Redeemed/TokensBurned/...).

Каждая запись валидируется JSON Schema контрактом и пишется в лог.
Журнал участвует в атомарном откате: записи отменённой операции удаляются.
"""

import logging
from typing import Iterator

from src.core.contracts import validate_event_record
from src.core.domain.events import IssuanceEvent

logger = logging.getLogger(__name__)


class EventLog:
    """Упорядоченный журнал записей с монотонным seq."""

    def __init__(self, validate: bool = True):
        self.validate = validate
        self._records: list[IssuanceEvent] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[IssuanceEvent]:
        return iter(list(self._records))

    @property
    def next_seq(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[IssuanceEvent]:
        return list(self._records)

    def of_type(self, event: str) -> list[IssuanceEvent]:
        return [record for record in self._records if record.event == event]

    def append(self, record: IssuanceEvent) -> IssuanceEvent:
        if record.seq != self.next_seq:
            raise ValueError(f"record seq {record.seq} != expected {self.next_seq}")
        if self.validate:
            validate_event_record(record.model_dump(mode="json"))

        self._records.append(record)
        logger.info("%s %s", record.event, record.model_dump_json(exclude={"event"}))
        return record

    def mark(self) -> int:
        return len(self._records)

    def rollback_to(self, mark: int) -> None:
        del self._records[mark:]

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, time, timedelta, timezone
from typing import Any, Generic, TypeVar

from sqlmodel import Session, col, select

from app.core.errors import ValidationError
from app.models.tracking import (
    CalorieIntakeEntry,
    HeightEntry,
    SleepEntry,
    StepEntry,
    TrackedEntry,
    WaterEntry,
    WeightEntry,
    WorkoutEntry,
)

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=TrackedEntry)

ALL_ENTRIES = "all"


def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def parse_limit(limit: Any) -> str | int:
    """
    Accept ``"all"`` or a positive number of days (int or numeric string).
    """
    if limit is None or limit == "":
        raise ValidationError("Please provide limit")
    if isinstance(limit, str):
        normalized = limit.strip().lower()
        if normalized == ALL_ENTRIES:
            return ALL_ENTRIES
        try:
            limit = int(normalized)
        except ValueError as exc:
            raise ValidationError("limit must be 'all' or a positive number of days") from exc
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValidationError("limit must be 'all' or a positive number of days")
    return limit


class EntryStore(Generic[EntryT]):
    """
    Append-only, per-user log of dated measurements backed by one table.

    Storage order is ascending primary key, so the last appended entry is the
    one with the highest id regardless of its ``date``. Read operations never
    write; only ``append`` and ``delete_by_date`` commit.
    """

    def __init__(
        self,
        model: type[EntryT],
        *,
        value_fields: tuple[str, ...],
        missing_message: str,
        delete_precision: timedelta | None = None,
    ) -> None:
        self.model = model
        self.value_fields = value_fields
        self.missing_message = missing_message
        self.delete_precision = delete_precision

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _ordered(self, user_id: int):
        return (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(col(self.model.id))
        )

    def append(
        self,
        session: Session,
        user_id: int,
        *,
        date: datetime | None,
        values: dict[str, Any],
    ) -> EntryT:
        if date is None or any(values.get(field) is None for field in self.value_fields):
            raise ValidationError(self.missing_message)

        entry = self.model(
            user_id=user_id,
            date=to_utc_naive(date),
            **{field: values[field] for field in self.value_fields},
        )
        session.add(entry)
        session.commit()
        session.refresh(entry)
        logger.info("Appended %s entry %s for user %s", self.name, entry.id, user_id)
        return entry

    def all(self, session: Session, user_id: int) -> Sequence[EntryT]:
        return session.exec(self._ordered(user_id)).all()

    def filter_by_exact_date(
        self,
        session: Session,
        user_id: int,
        day: datetime | None = None,
        *,
        now: datetime | None = None,
    ) -> Sequence[EntryT]:
        """
        Entries on the same calendar day as ``day`` (default: today).
        """
        target = to_utc_naive(day) if day is not None else (now or utcnow_naive())
        day_start = start_of_day(target)
        statement = self._ordered(user_id).where(
            self.model.date >= day_start,
            self.model.date < day_start + timedelta(days=1),
        )
        return session.exec(statement).all()

    def filter_by_rolling_limit(
        self,
        session: Session,
        user_id: int,
        limit: Any,
        *,
        now: datetime | None = None,
    ) -> Sequence[EntryT]:
        """
        ``"all"`` returns the whole log; N returns entries dated within the
        last N days measured from the current instant, not from midnight.
        """
        parsed = parse_limit(limit)
        if parsed == ALL_ENTRIES:
            return self.all(session, user_id)

        try:
            threshold = (now or utcnow_naive()) - timedelta(days=parsed)
        except OverflowError:
            # Window reaches past datetime.min, so every entry is in range.
            return self.all(session, user_id)
        statement = self._ordered(user_id).where(self.model.date >= threshold)
        return session.exec(statement).all()

    def between(
        self,
        session: Session,
        user_id: int,
        start: datetime,
        end: datetime,
    ) -> Sequence[EntryT]:
        """
        Entries with ``start <= date <= end`` (both bounds inclusive).
        """
        statement = self._ordered(user_id).where(
            self.model.date >= start,
            self.model.date <= end,
        )
        return session.exec(statement).all()

    def last_entry(self, session: Session, user_id: int) -> EntryT | None:
        statement = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(col(self.model.id).desc())
        )
        return session.exec(statement).first()

    def delete_by_date(self, session: Session, user_id: int, date: datetime | None) -> int:
        """
        Remove entries stored at exactly ``date``. Unknown dates are a no-op.
        """
        if date is None:
            raise ValidationError("Please provide date")

        target = to_utc_naive(date)
        statement = self._ordered(user_id)
        if self.delete_precision is None:
            statement = statement.where(self.model.date == target)
        else:
            lower = target - timedelta(microseconds=target.microsecond)
            statement = statement.where(
                self.model.date >= lower,
                self.model.date < lower + self.delete_precision,
            )

        entries = session.exec(statement).all()
        for entry in entries:
            session.delete(entry)
        session.commit()
        removed = len(entries)
        logger.info("Deleted %s %s entries for user %s", removed, self.name, user_id)
        return removed


weight_store = EntryStore(
    WeightEntry,
    value_fields=("weight",),
    missing_message="Please provide date and weight",
)
height_store = EntryStore(
    HeightEntry,
    value_fields=("height",),
    missing_message="Please provide date and height",
)
# Sleep entries are matched on the second, ignoring sub-second precision.
sleep_store = EntryStore(
    SleepEntry,
    value_fields=("duration_in_hrs",),
    missing_message="Please provide date and sleep duration",
    delete_precision=timedelta(seconds=1),
)
step_store = EntryStore(
    StepEntry,
    value_fields=("steps",),
    missing_message="Please provide date and steps count",
)
water_store = EntryStore(
    WaterEntry,
    value_fields=("amount_in_milliliters",),
    missing_message="Please provide date and water amount",
)
workout_store = EntryStore(
    WorkoutEntry,
    value_fields=("exercise", "duration_in_minutes"),
    missing_message="Please provide date, exercise, and duration",
)
calorie_intake_store = EntryStore(
    CalorieIntakeEntry,
    value_fields=("item", "quantity", "quantitytype", "calorie_intake"),
    missing_message="Please provide date, item, quantity, quantity type and calorie intake",
)

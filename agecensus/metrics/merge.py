"""Reduce independently built frequency tables into one."""

from __future__ import annotations

from typing import Iterable

from .frequency import FrequencyTable


def merge_tables(tables: Iterable[FrequencyTable]) -> FrequencyTable:
    """Sum counts per age across `tables` into a new table.

    Inputs are left untouched, so the result does not depend on the order in
    which concurrent producers finished.
    """
    combined = FrequencyTable()
    for table in tables:
        combined.update(table)
    return combined


__all__ = ["merge_tables"]

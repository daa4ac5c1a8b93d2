"""Classifies time feed updates into transitions worth reacting to."""
import logging
from enum import Enum
from typing import Optional

from time_snapshot import SnapshotState, TimeSnapshot, same_date, snapshot_state


class Transition(Enum):
    """Kind of change between two snapshots."""
    NONE = "none"
    MATERIAL = "material"


def classify(previous: Optional[TimeSnapshot], incoming: Optional[TimeSnapshot]) -> Transition:
    """
    Compare the last known snapshot with an incoming one.

    Only a change of calendar day, month or year is material. Time-of-day
    changes are cosmetic and classify as NONE. A partial incoming snapshot
    never counts, whatever the previous one was.

    Args:
        previous: Snapshot attached to the current record, if any
        incoming: Snapshot delivered by the time feed, if any

    Returns:
        Transition.MATERIAL or Transition.NONE
    """
    incoming_state = snapshot_state(incoming)
    if incoming_state is SnapshotState.ABSENT:
        return Transition.NONE
    if incoming_state is SnapshotState.PARTIAL:
        logging.debug(f"Ignoring partial time snapshot: {incoming}")
        return Transition.NONE

    if snapshot_state(previous) is not SnapshotState.COMPLETE:
        # First usable observation
        return Transition.MATERIAL

    if same_date(previous, incoming):
        return Transition.NONE
    return Transition.MATERIAL


def is_cosmetic(previous: Optional[TimeSnapshot], incoming: Optional[TimeSnapshot]) -> bool:
    """True if only the time of day moved between two valid snapshots on the same date."""
    if snapshot_state(previous) is not SnapshotState.COMPLETE:
        return False
    if snapshot_state(incoming) is not SnapshotState.COMPLETE:
        return False
    if not same_date(previous, incoming):
        return False
    return (previous.second, previous.minute) != (incoming.second, incoming.minute)

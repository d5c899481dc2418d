"""Maps a failure back to the check position that produced it."""

from typing import Sequence

from ..checks.types import Failed, ReasonKind


def canonical_check(failure: Failed) -> str | None:
    """The check identifier a failure belongs to.

    Invalid checks resolve to the literal identifier they carry; a cancelled
    override belongs to no check.
    """
    if failure.reason is ReasonKind.INVALID_CHECK:
        return failure.output
    check = failure.reason.check
    return check.value if check else None


def locate(checks: Sequence[str], failure: Failed, start: int = 0) -> int | None:
    """Index of the first entry in ``checks[start:]`` matching the failure.

    Args:
        checks: The profile's full ordered check list.
        failure: The failure to place.
        start: First index to consider; the orchestrator passes the index
            where the sequence stopped so a repeated check maps to the
            occurrence that actually ran.

    Returns:
        The index within ``checks``, or None when the failure maps to no
        configured check.
    """
    name = canonical_check(failure)
    if name is None:
        return None
    for index in range(start, len(checks)):
        if checks[index] == name:
            return index
    return None

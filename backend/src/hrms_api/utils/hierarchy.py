"""Cycle detection for parent-pointer trees (departments, reporting lines)."""

from collections.abc import Awaitable, Callable
from uuid import UUID

from hrms_api.exceptions import CircularHierarchyError


async def ensure_no_cycle(
    node_id: UUID,
    proposed_parent_id: UUID,
    get_parent_id: Callable[[UUID], Awaitable[UUID | None]],
    max_steps: int,
    message: str,
) -> None:
    """Reject making ``proposed_parent_id`` the parent of ``node_id``.

    Walks upward from the proposed parent. Reaching ``node_id`` means the
    assignment would close a loop. The walk stops after ``max_steps`` hops
    (the number of nodes in the table), so a loop already present in the
    stored data is reported instead of spinning forever.

    Args:
        node_id: Node being re-parented
        proposed_parent_id: Parent it would get
        get_parent_id: Loads the parent ID of a node, None for a root
        max_steps: Upper bound on the number of hops
        message: Error message for a detected cycle

    Raises:
        CircularHierarchyError: If the assignment would create a cycle
    """
    if node_id == proposed_parent_id:
        raise CircularHierarchyError(message, node_id, proposed_parent_id)

    current: UUID | None = proposed_parent_id
    steps = 0
    while current is not None:
        if current == node_id:
            raise CircularHierarchyError(message, node_id, proposed_parent_id)
        steps += 1
        if steps > max_steps:
            raise CircularHierarchyError(
                "Existing hierarchy contains a cycle", node_id, proposed_parent_id
            )
        current = await get_parent_id(current)

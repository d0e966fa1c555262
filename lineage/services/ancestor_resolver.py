"""
Ancestor Resolver - Ordered ancestor chains over the parent relationship.

Given a location name, produces the names of its ancestors from the
immediate parent up to the root, excluding the location itself.

Resolution ends at:
- a root (parent is NULL): the chain is complete
- a dangling parent (no row with that name): the chain stops there, no error
- the depth bound: CycleGuardTrippedError, never a truncated chain

Strategies:
- "recursive": one query using a recursive CTE that carries a depth column
  and stops expanding one level past the bound
- "iterative": one point lookup per step through LocationStore

Both strategies return identical results for the same data.
"""

import logging
from typing import List, Optional

from sqlalchemy import Integer, literal_column, select
from sqlalchemy.ext.asyncio import AsyncSession

from lineage.config import settings
from lineage.database import guarded
from lineage.domain import ChildOf
from lineage.errors import CycleGuardTrippedError
from lineage.models import Location
from lineage.observability import record_ancestor_resolution, record_cycle_guard_trip

from .location_store import LocationStore

logger = logging.getLogger(__name__)


class AncestorResolver:
    """Resolve ancestor chains with a bounded traversal."""

    def __init__(
        self,
        db: AsyncSession,
        max_depth: Optional[int] = None,
        strategy: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.db = db
        self.max_depth = max_depth if max_depth is not None else settings.ANCESTOR_MAX_DEPTH
        self.strategy = strategy or settings.ANCESTOR_STRATEGY
        self.timeout = timeout if timeout is not None else settings.DB_QUERY_TIMEOUT

        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.strategy not in ("recursive", "iterative"):
            raise ValueError(f"Unknown ancestor strategy: {self.strategy}")

    async def resolve(self, name: str) -> List[str]:
        """
        Return the ancestors of `name`, nearest first.

        Returns an empty list when the location does not exist, is a root,
        or its parent is dangling.

        Raises:
            CycleGuardTrippedError: The chain is longer than max_depth
            StorageUnavailableError: Database failure or timeout (whole chain)
        """
        if self.strategy == "recursive":
            walk = self._resolve_recursive(name)
        else:
            walk = self._resolve_iterative(name)

        ancestors, outcome = await guarded("resolve_ancestors", walk, self.timeout)

        record_ancestor_resolution(self.strategy, outcome, len(ancestors))
        logger.debug(
            "Resolved ancestors",
            extra={"location": name, "depth": len(ancestors), "outcome": outcome},
        )
        return ancestors

    def _trip(self, name: str) -> CycleGuardTrippedError:
        record_cycle_guard_trip(self.strategy)
        logger.error(
            "Ancestor chain exceeds depth bound, possible parent cycle",
            extra={"location": name, "max_depth": self.max_depth, "strategy": self.strategy},
        )
        return CycleGuardTrippedError(name, self.max_depth)

    async def _resolve_recursive(self, name: str) -> tuple[List[str], str]:
        # Anchor is the start row at depth 0; each step joins the row named by
        # the previous row's parent. Expansion stops at depth max_depth + 1, so
        # a row at that depth means the bound was exceeded.
        chain = (
            select(
                Location.name,
                Location.parent,
                literal_column("0", Integer).label("depth"),
            )
            .where(Location.name == name)
            .cte("ancestor_chain", recursive=True)
        )
        chain = chain.union_all(
            select(
                Location.name,
                Location.parent,
                (chain.c.depth + 1).label("depth"),
            )
            .where(Location.name == chain.c.parent)
            .where(chain.c.depth <= self.max_depth)
        )
        stmt = (
            select(chain.c.name, chain.c.parent, chain.c.depth)
            .where(chain.c.depth > 0)
            .order_by(chain.c.depth)
        )

        rows = (await self.db.execute(stmt)).all()

        if rows and rows[-1].depth > self.max_depth:
            raise self._trip(name)

        ancestors = [row.name for row in rows]
        if not rows:
            # Start is missing, a root, or points at a missing parent
            return ancestors, "empty"
        return ancestors, "root" if rows[-1].parent is None else "dangling"

    async def _resolve_iterative(self, name: str) -> tuple[List[str], str]:
        store = LocationStore(self.db, timeout=self.timeout)

        current = await store.get_by_name(name)
        if current is None:
            return [], "empty"

        ancestors: List[str] = []
        while isinstance(current.parent, ChildOf):
            parent = await store.get_by_name(current.parent.name)
            if parent is None:
                return ancestors, "dangling" if ancestors else "empty"
            ancestors.append(parent.name)
            if len(ancestors) > self.max_depth:
                raise self._trip(name)
            current = parent

        return ancestors, "root" if ancestors else "empty"

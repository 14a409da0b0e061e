"""
Diagram service orchestrator.

Owner-scoped diagram lifecycle: title and structural validation, per-owner
title uniqueness, timestamp bookkeeping and atomic partial updates.

Dependencies: bossflow.boundary.db.CRUD, bossflow.core.validation
System role: Diagram use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bossflow.application.services.user_service import UserService
from bossflow.boundary.db.base import utc_now
from bossflow.boundary.db.CRUD.diagram_crud import diagram_crud
from bossflow.boundary.db.CRUD.user_crud import user_crud
from bossflow.boundary.db.models.diagram_model import DiagramModel
from bossflow.core.exceptions import (
    BossFlowError,
    DiagramNotFoundError,
    DiagramValidationError,
    DuplicateTitleError,
    ErrorReason,
)
from bossflow.core.validation import (
    GuardResult,
    ensure_valid_structure,
    validate_description,
    validate_title,
)

logger = logging.getLogger(__name__)

STRUCTURE_FIELDS = ("nodes", "edges", "images")


def _raise_on_failure(result: GuardResult) -> None:
    if not result.ok:
        raise DiagramValidationError(result.message, reason=result.reason, field=result.field)


def _parse_id(diagram_id: UUID | str) -> UUID:
    """Malformed ids are reported exactly like missing diagrams."""
    if isinstance(diagram_id, UUID):
        return diagram_id
    try:
        return UUID(str(diagram_id))
    except ValueError:
        raise DiagramNotFoundError(str(diagram_id))


def _to_dict(diagram: DiagramModel) -> dict:
    return {
        "id": diagram.id,
        "title": diagram.title,
        "description": diagram.description,
        "nodes": diagram.nodes or [],
        "edges": diagram.edges or [],
        "images": diagram.images or [],
        "is_template": diagram.is_template,
        "created_at": diagram.created_at,
        "updated_at": diagram.updated_at,
    }


class DiagramService:
    """Diagram service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize diagram service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _ensure_title_free(
        self,
        owner_id: UUID,
        title: str,
        exclude_id: UUID | None = None,
    ) -> None:
        if await diagram_crud.title_taken(self.db, owner_id, title, exclude_id=exclude_id):
            raise DuplicateTitleError(title)

    async def _lost_title_race(
        self,
        owner_id: UUID,
        title: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Roll back, then report whether a concurrent writer now holds title."""
        await self.db.rollback()
        if not title:
            return False
        taken = await diagram_crud.title_taken(self.db, owner_id, title, exclude_id=exclude_id)
        if taken:
            logger.warning(
                "Concurrent write lost title race",
                extra={"owner_id": str(owner_id), "title": title},
            )
        return taken

    async def create_diagram(self, owner_id: UUID, draft: dict[str, Any]) -> dict:
        """
        Validate and persist a new diagram.

        Args:
            owner_id: Authenticated user's ID
            draft: title, and optionally description, nodes, edges, images, is_template

        Returns:
            dict: Created diagram

        Raises:
            UnauthenticatedError: No account exists for owner_id
            DiagramValidationError: Title or structure invalid (nothing persisted)
            DuplicateTitleError: Owner already has a diagram with this title
        """
        await UserService(self.db).require_user(owner_id)

        _raise_on_failure(validate_title(draft.get("title")))
        _raise_on_failure(validate_description(draft.get("description")))

        nodes = draft.get("nodes") or []
        edges = draft.get("edges") or []
        images = draft.get("images") or []
        ensure_valid_structure(nodes, edges, images)

        title = draft["title"].strip()
        description = (draft.get("description") or "").strip()

        try:
            await self._ensure_title_free(owner_id, title)

            now = utc_now()
            diagram = await diagram_crud.create(
                self.db,
                owner_id=owner_id,
                title=title,
                description=description,
                nodes=nodes,
                edges=edges,
                images=images,
                is_template=bool(draft.get("is_template", False)),
                created_at=now,
                updated_at=now,
            )
            await user_crud.adjust_stats(self.db, owner_id, diagrams=1, nodes=len(nodes))
            await self.db.commit()

            logger.info(
                "Diagram created",
                extra={
                    "diagram_id": str(diagram.id),
                    "owner_id": str(owner_id),
                    "node_count": len(nodes),
                    "edge_count": len(edges),
                },
            )
            return _to_dict(diagram)
        except IntegrityError as e:
            if await self._lost_title_race(owner_id, title):
                raise DuplicateTitleError(title) from e
            raise
        except BossFlowError:
            await self.db.rollback()
            raise
        except Exception as e:
            logger.error(
                "Failed to create diagram",
                extra={"error": str(e), "owner_id": str(owner_id)},
            )
            await self.db.rollback()
            raise

    async def get_diagram(self, owner_id: UUID, diagram_id: UUID | str) -> dict:
        """
        Get a diagram owned by owner_id.

        Raises:
            DiagramNotFoundError: Missing, malformed id, or owned by someone else
        """
        diagram = await diagram_crud.get_owned(self.db, owner_id, _parse_id(diagram_id))
        if not diagram:
            raise DiagramNotFoundError(str(diagram_id))
        return _to_dict(diagram)

    async def list_diagrams(self, owner_id: UUID) -> list[dict]:
        """
        List an owner's diagrams (templates excluded), newest update first.

        Args:
            owner_id: Authenticated user's ID

        Returns:
            list[dict]: Diagrams owned by owner_id
        """
        diagrams = await diagram_crud.list_by_owner(self.db, owner_id)
        return [_to_dict(d) for d in diagrams]

    async def list_templates(self, owner_id: UUID) -> list[dict]:
        """List an owner's templates, newest update first."""
        templates = await diagram_crud.list_by_owner(self.db, owner_id, is_template=True)
        return [_to_dict(t) for t in templates]

    async def update_diagram(
        self,
        owner_id: UUID,
        diagram_id: UUID | str,
        patch: dict[str, Any],
    ) -> dict:
        """
        Apply a partial update atomically.

        Only keys present in patch are replaced. When any of nodes, edges or
        images is present, the merged state (patched values over current ones)
        must pass full structural validation. The row is locked for the
        duration of the transaction; on any failure nothing is written.

        Args:
            owner_id: Authenticated user's ID
            diagram_id: Diagram UUID
            patch: Any subset of title, description, nodes, edges, images, is_template

        Returns:
            dict: Updated diagram

        Raises:
            DiagramNotFoundError: Missing or owned by someone else
            DiagramValidationError: Patched title or merged structure invalid
            DuplicateTitleError: New title already used by another of the owner's diagrams
        """
        parsed_id = _parse_id(diagram_id)
        staged: dict[str, Any] = {}

        try:
            diagram = await diagram_crud.get_owned(
                self.db, owner_id, parsed_id, for_update=True
            )
            if not diagram:
                raise DiagramNotFoundError(str(diagram_id))

            if "title" in patch:
                _raise_on_failure(validate_title(patch["title"]))
                staged["title"] = patch["title"].strip()

            if "description" in patch:
                _raise_on_failure(validate_description(patch["description"]))
                staged["description"] = (patch["description"] or "").strip()

            for key in STRUCTURE_FIELDS:
                if key not in patch:
                    continue
                if patch[key] is None:
                    raise DiagramValidationError(
                        f'The "{key}" field must be an array',
                        reason=ErrorReason.INVALID_TYPE,
                        field=key,
                    )
                staged[key] = patch[key]

            if any(key in staged for key in STRUCTURE_FIELDS):
                ensure_valid_structure(
                    staged.get("nodes", diagram.nodes),
                    staged.get("edges", diagram.edges),
                    staged.get("images", diagram.images),
                )

            if "title" in staged:
                await self._ensure_title_free(owner_id, staged["title"], exclude_id=parsed_id)

            if "is_template" in patch and patch["is_template"] is not None:
                staged["is_template"] = bool(patch["is_template"])

            if not staged:
                current = _to_dict(diagram)
                await self.db.rollback()
                return current

            node_delta = 0
            if "nodes" in staged:
                node_delta = len(staged["nodes"]) - len(diagram.nodes or [])

            for key, value in staged.items():
                setattr(diagram, key, value)
            diagram.updated_at = utc_now()

            await user_crud.adjust_stats(self.db, owner_id, nodes=node_delta)
            await self.db.flush()
            await self.db.commit()

            logger.info(
                "Diagram updated",
                extra={
                    "diagram_id": str(parsed_id),
                    "owner_id": str(owner_id),
                    "updates": sorted(staged),
                },
            )
            return _to_dict(diagram)
        except IntegrityError as e:
            title = staged.get("title", "")
            if await self._lost_title_race(owner_id, title, exclude_id=parsed_id):
                raise DuplicateTitleError(title) from e
            raise
        except BossFlowError:
            await self.db.rollback()
            raise
        except Exception as e:
            logger.error(
                "Failed to update diagram",
                extra={"error": str(e), "diagram_id": str(diagram_id)},
            )
            await self.db.rollback()
            raise

    async def delete_diagram(self, owner_id: UUID, diagram_id: UUID | str) -> bool:
        """
        Delete a diagram owned by owner_id.

        Returns:
            bool: True if deleted

        Raises:
            DiagramNotFoundError: Missing or owned by someone else
        """
        parsed_id = _parse_id(diagram_id)
        try:
            deleted = await diagram_crud.delete_owned(self.db, owner_id, parsed_id)
            if not deleted:
                raise DiagramNotFoundError(str(diagram_id))
            await self.db.commit()

            logger.info(
                "Diagram deleted",
                extra={"diagram_id": str(parsed_id), "owner_id": str(owner_id)},
            )
            return True
        except BossFlowError:
            await self.db.rollback()
            raise
        except Exception as e:
            logger.error(
                "Failed to delete diagram",
                extra={"error": str(e), "diagram_id": str(diagram_id)},
            )
            await self.db.rollback()
            raise

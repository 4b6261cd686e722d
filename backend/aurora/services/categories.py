"""
Event categories: listing, creation and guarded deletion.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.errors import AuthorizationError, NotFoundError, ValidationError
from aurora.models.event_category import EventCategory
from aurora.repositories.categories import EventCategoryRepository
from aurora.schemas.category import CategoryCreate

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(
        self,
        db: AsyncSession,
        user_id: UUID,
        categories: Optional[EventCategoryRepository] = None,
    ):
        self.db = db
        self.user_id = user_id
        self.categories = categories or EventCategoryRepository(db)

    async def list_available(self) -> List[EventCategory]:
        return await self.categories.get_available_for_user(self.user_id)

    async def list_system(self) -> List[EventCategory]:
        return await self.categories.get_system_categories()

    async def list_custom(self) -> List[EventCategory]:
        return await self.categories.get_user_custom_categories(self.user_id)

    async def get_category(self, category_id: UUID) -> EventCategory:
        category = await self.categories.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"No category exists with id {category_id}", title="Category not found")
        if not category.is_available_for(self.user_id):
            raise AuthorizationError("This category belongs to another user")
        return category

    async def create_category(self, data: CategoryCreate) -> EventCategory:
        if await self.categories.exists_with_name(data.name, self.user_id):
            raise ValidationError(f"A category named '{data.name}' already exists")

        category = EventCategory(
            user_id=self.user_id,
            name=data.name,
            description=data.description,
            color=data.color,
            icon=data.icon,
            sort_order=data.sort_order,
            is_system_default=False,
            is_active=True,
        )
        return await self.categories.add(category)

    async def delete_category(
        self,
        category_id: UUID,
        target_category_id: Optional[UUID] = None,
    ) -> None:
        """
        Delete a user-owned category.

        System categories and other users' categories are refused whatever
        their event count. A category that still has events is only deleted
        when a target category is given; its events move there first. The
        reassignment and the delete are committed together.

        Args:
            category_id: Category to delete
            target_category_id: Category that receives the linked events

        Raises:
            NotFoundError: category does not exist
            AuthorizationError: system category or not owned by the caller
            ValidationError: events remain and the target is missing or unusable
        """
        category = await self.categories.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"No category exists with id {category_id}", title="Category not found")

        if category.is_system_default:
            raise AuthorizationError("System categories cannot be deleted")
        if category.user_id != self.user_id:
            raise AuthorizationError("This category belongs to another user")

        event_count = await self.categories.get_event_count(category_id)
        if event_count == 0:
            await self.categories.delete(category_id)
            await self.categories.save_changes()
            logger.info("Deleted empty category %s", category_id)
            return

        if target_category_id is None:
            raise ValidationError(
                f"Category '{category.name}' has {event_count} event(s). "
                "Pass target_category_id to move them before deleting",
                title="Category has events",
                extensions={"event_count": event_count},
            )

        if target_category_id == category_id:
            raise ValidationError("Target category must differ from the category being deleted")

        target = await self.categories.get_by_id(target_category_id)
        if not target or not target.is_available_for(self.user_id):
            raise ValidationError(
                f"Target category {target_category_id} does not exist or is not available",
                extensions={"target_category_id": str(target_category_id)},
            )

        moved = await self.categories.reassign_events(category_id, target_category_id)
        await self.categories.delete(category_id)
        await self.categories.save_changes()
        logger.info(
            "Deleted category %s after moving %d event(s) to %s",
            category_id, moved, target_category_id,
        )

"""Promotion application service.

Manages collections, discounts, sales and banners. Each promotional
submission goes through the same steps before anything is written:

    1. correct the dates for the submitted status (on create, and on
       update when the status changes)
    2. validate the corrected submission
    3. persist
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.store_service import build_images, ensure_store_owner
from storefront.catalog.models import Category
from storefront.domain.exceptions import NotFoundError
from storefront.infrastructure.file_storage import FileStorageClient
from storefront.promotions.models import Banner, Collection, Discount, Sale
from storefront.promotions.repository import BannerRepository, PromotionRepository
from storefront.promotions.status import (
    DateBounds,
    PromotionKind,
    PromotionStatus,
    correct_dates,
    end_date_bounds,
    ensure_utc,
    start_date_bounds,
)
from storefront.promotions.validation import (
    DiscountType,
    validate_discount,
    validate_sale,
    validate_window,
)

logger = structlog.get_logger()

_KINDS: dict[type, PromotionKind] = {
    Collection: PromotionKind.COLLECTION,
    Discount: PromotionKind.DISCOUNT,
    Sale: PromotionKind.SALE,
}

_REQUIRED = {
    "name",
    "status",
    "start_date",
    "end_date",
    "type",
    "value",
    "discount_type",
    "discount_value",
}

_ENUM_COLUMNS = ("type", "discount_type")


def _store_enums(fields: dict[str, Any]) -> None:
    for name in _ENUM_COLUMNS:
        if fields.get(name) is not None:
            fields[name] = DiscountType(fields[name]).value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StatusPreview:
    """Corrected dates plus selectable bounds for a status."""

    status: PromotionStatus
    start_date: datetime
    end_date: datetime
    start_date_bounds: DateBounds
    end_date_bounds: DateBounds


class PromotionService:
    """Service for promotional entities and banners.

    Example usage:
        service = PromotionService(session, file_storage)
        discount = await service.create_discount(user_id, {...})
    """

    def __init__(
        self,
        session: AsyncSession,
        file_storage: FileStorageClient,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize promotion service.

        Args:
            session: Database session.
            file_storage: File storage client for image cleanup.
            clock: Source of "now".
        """
        self.session = session
        self.file_storage = file_storage
        self.clock = clock
        self.collections = PromotionRepository(session, Collection)
        self.discounts = PromotionRepository(session, Discount)
        self.sales = PromotionRepository(session, Sale)
        self.banners = BannerRepository(session)

    def _repository(self, model: type) -> PromotionRepository:
        return {
            Collection: self.collections,
            Discount: self.discounts,
            Sale: self.sales,
        }[model]

    # ========================================================================
    # Status Preview
    # ========================================================================

    def preview_status(
        self,
        kind: PromotionKind,
        status: PromotionStatus,
        start_date: datetime,
        end_date: datetime,
    ) -> StatusPreview:
        """Show what a submission would be corrected to, and the allowed dates.

        Args:
            kind: Entity kind (drives the default scheduled duration).
            status: Status about to be submitted.
            start_date: Submitted start.
            end_date: Submitted end.

        Returns:
            StatusPreview for the submission.
        """
        now = self.clock()
        start, end = correct_dates(status, start_date, end_date, now, kind.default_duration)
        return StatusPreview(
            status=status,
            start_date=start,
            end_date=end,
            start_date_bounds=start_date_bounds(status, now),
            end_date_bounds=end_date_bounds(status, start, now),
        )

    # ========================================================================
    # Shared Create / Update / Delete
    # ========================================================================

    def _corrected(
        self,
        model: type,
        status: PromotionStatus,
        start_date: datetime,
        end_date: datetime,
    ) -> tuple[datetime, datetime]:
        return correct_dates(
            status,
            start_date,
            end_date,
            self.clock(),
            _KINDS[model].default_duration,
        )

    async def _create(self, model: type, user_id: str, data: dict[str, Any]) -> Any:
        await ensure_store_owner(self.session, data["store_id"], user_id)

        data = dict(data)
        _store_enums(data)
        status = PromotionStatus(data.pop("status", PromotionStatus.INACTIVE))
        start, end = self._corrected(model, status, data.pop("start_date"), data.pop("end_date"))
        self._validate(model, start, end, data)

        images = data.pop("images", None)
        entity = model(status=status.value, start_date=start, end_date=end, **data)
        if model is Collection:
            entity.images = build_images(images)

        entity = await self._repository(model).save(entity)
        logger.info(
            "Promotion created",
            kind=_KINDS[model].value,
            promotion_id=entity.id,
            status=status.value,
            start_date=start.isoformat(),
            end_date=end.isoformat(),
        )
        return entity

    async def _get(self, model: type, entity_id: str) -> Any:
        entity = await self._repository(model).get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(model.__name__, entity_id)
        return entity

    async def _update(self, model: type, entity_id: str, user_id: str, fields: dict[str, Any]) -> Any:
        entity = await self._get(model, entity_id)
        await ensure_store_owner(self.session, entity.store_id, user_id)

        fields = {
            name: value
            for name, value in fields.items()
            if not (name in _REQUIRED and value is None)
        }
        _store_enums(fields)
        images = fields.pop("images", None)

        current_status = PromotionStatus(entity.status)
        status = PromotionStatus(fields.pop("status", current_status))
        start = ensure_utc(fields.pop("start_date", entity.start_date))
        end = ensure_utc(fields.pop("end_date", entity.end_date))
        if status != current_status:
            start, end = self._corrected(model, status, start, end)

        merged = {
            name: fields.get(name, getattr(entity, name))
            for name in ("code", "type", "value", "min_purchase", "max_uses",
                         "discount_type", "discount_value")
            if hasattr(entity, name)
        }
        self._validate(model, start, end, merged)

        entity.status = status.value
        entity.start_date = start
        entity.end_date = end
        for name, value in fields.items():
            setattr(entity, name, value)
        if model is Collection and images:
            entity.images.extend(build_images(images))

        entity = await self._repository(model).save(entity)
        logger.info(
            "Promotion updated",
            kind=_KINDS[model].value,
            promotion_id=entity_id,
            status=status.value,
            status_changed=status != current_status,
        )
        return entity

    async def _delete(self, model: type, entity_id: str, user_id: str) -> None:
        entity = await self._get(model, entity_id)
        await ensure_store_owner(self.session, entity.store_id, user_id)
        if model is Collection:
            await self.file_storage.delete_files([image.key for image in entity.images])
        await self._repository(model).delete(entity)
        logger.info("Promotion deleted", kind=_KINDS[model].value, promotion_id=entity_id)

    @staticmethod
    def _validate(model: type, start: datetime, end: datetime, data: dict[str, Any]) -> None:
        if model is Discount:
            validate_discount(
                start_date=start,
                end_date=end,
                discount_type=DiscountType(data["type"]),
                value=data["value"],
                code=data.get("code"),
                min_purchase=data.get("min_purchase"),
                max_uses=data.get("max_uses"),
            )
        elif model is Sale:
            validate_sale(
                start_date=start,
                end_date=end,
                discount_type=DiscountType(data["discount_type"]),
                discount_value=data["discount_value"],
            )
        else:
            validate_window(start, end)

    # ========================================================================
    # Collections
    # ========================================================================

    async def create_collection(self, user_id: str, data: dict[str, Any]) -> Collection:
        return await self._create(Collection, user_id, data)

    async def get_collection(self, collection_id: str) -> Collection:
        return await self._get(Collection, collection_id)

    async def list_collections(
        self,
        store_id: str | None = None,
        status: PromotionStatus | None = None,
    ) -> Sequence[Collection]:
        return await self.collections.list_all(store_id=store_id, status=status)

    async def update_collection(
        self, collection_id: str, user_id: str, fields: dict[str, Any]
    ) -> Collection:
        return await self._update(Collection, collection_id, user_id, fields)

    async def delete_collection(self, collection_id: str, user_id: str) -> None:
        await self._delete(Collection, collection_id, user_id)

    # ========================================================================
    # Discounts
    # ========================================================================

    async def create_discount(self, user_id: str, data: dict[str, Any]) -> Discount:
        """Create a discount.

        Raises:
            ValidationError: If the value is out of range for its type, the
                code is malformed or the window ends before it starts.
        """
        return await self._create(Discount, user_id, data)

    async def get_discount(self, discount_id: str) -> Discount:
        return await self._get(Discount, discount_id)

    async def list_discounts(
        self,
        store_id: str | None = None,
        status: PromotionStatus | None = None,
    ) -> Sequence[Discount]:
        return await self.discounts.list_all(store_id=store_id, status=status)

    async def update_discount(
        self, discount_id: str, user_id: str, fields: dict[str, Any]
    ) -> Discount:
        return await self._update(Discount, discount_id, user_id, fields)

    async def delete_discount(self, discount_id: str, user_id: str) -> None:
        await self._delete(Discount, discount_id, user_id)

    # ========================================================================
    # Sales
    # ========================================================================

    async def create_sale(self, user_id: str, data: dict[str, Any]) -> Sale:
        return await self._create(Sale, user_id, data)

    async def get_sale(self, sale_id: str) -> Sale:
        return await self._get(Sale, sale_id)

    async def list_sales(
        self,
        store_id: str | None = None,
        status: PromotionStatus | None = None,
    ) -> Sequence[Sale]:
        return await self.sales.list_all(store_id=store_id, status=status)

    async def update_sale(self, sale_id: str, user_id: str, fields: dict[str, Any]) -> Sale:
        return await self._update(Sale, sale_id, user_id, fields)

    async def delete_sale(self, sale_id: str, user_id: str) -> None:
        await self._delete(Sale, sale_id, user_id)

    # ========================================================================
    # Banners
    # ========================================================================

    async def create_banner(self, user_id: str, data: dict[str, Any]) -> Banner:
        """Create a banner; linked promotions and category must exist."""
        await ensure_store_owner(self.session, data["store_id"], user_id)

        links = {
            "collection_id": (Collection, "Collection"),
            "discount_id": (Discount, "Discount"),
            "sale_id": (Sale, "Sale"),
            "category_id": (Category, "Category"),
        }
        for name, (model, entity_type) in links.items():
            value = data.get(name)
            if value and await self.session.get(model, value) is None:
                raise NotFoundError(entity_type, value)

        banner = Banner(
            name=data["name"],
            description=data.get("description"),
            button_text=data.get("button_text"),
            button_link=data.get("button_link"),
            store_id=data["store_id"],
            collection_id=data.get("collection_id") or None,
            discount_id=data.get("discount_id") or None,
            sale_id=data.get("sale_id") or None,
            category_id=data.get("category_id") or None,
            images=build_images(data.get("images")),
        )
        banner = await self.banners.save(banner)
        logger.info("Banner created", banner_id=banner.id, store_id=banner.store_id)
        return banner

    async def list_banners(self, store_id: str | None = None) -> Sequence[Banner]:
        return await self.banners.list_all(store_id=store_id)

    async def delete_banner(self, banner_id: str, user_id: str) -> None:
        banner = await self.banners.get_by_id(banner_id)
        if banner is None:
            raise NotFoundError("Banner", banner_id)
        await ensure_store_owner(self.session, banner.store_id, user_id)

        await self.file_storage.delete_files([image.key for image in banner.images])
        await self.banners.delete(banner)
        logger.info("Banner deleted", banner_id=banner_id)

"""Directory Service — query and mutation operations over the employee store.

Invariants:
    - List: total_count and total_active_count use the SAME search predicate as the page
    - All validation happens before the first store call (no partial writes)
    - ConstraintViolation / NotFound from the store propagate unchanged
    - Create persists exactly one record or none; an image stored for a failed insert is removed
    - Asset store unavailability never blocks create: the employee is stored without image_ref
    - Images are removed once no record points at them (delete, image_ref replaced)
    - A page past the end returns no records without querying the store for them
    - Toggle is read-then-write and NOT atomic across concurrent callers (last writer wins)

Design Decisions:
    - Service depends only on the EmployeeStore / AssetStore protocols: SQL and
      in-memory stores are interchangeable
    - No authorization here: callers arrive with an identity already verified upstream
    - Count, count, fetch run without a shared transaction: numbers may be momentarily
      inconsistent under concurrent writes (accepted, not corrected)
"""

import logging

from employee_directory.core.domain_types import EmployeeId, EmployeeRecord
from employee_directory.core.employee_rules import (
    validate_employee_changes, validate_new_employee,
)
from employee_directory.core.errors import AssetStorageError
from employee_directory.core.listing import (
    DEFAULT_MAX_PAGE_SIZE, DEFAULT_PAGE_SIZE, EmployeePage, build_list_query,
)
from employee_directory.core.repository_protocols import AssetStore, EmployeeStore

logger = logging.getLogger(__name__)


class DirectoryService:
    """Employee directory operations."""

    def __init__(
        self,
        store: EmployeeStore,
        assets: AssetStore | None = None,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ):
        self.store = store
        self.assets = assets
        self.max_page_size = max_page_size

    async def list_employees(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_text: str = "",
        sort_field: str = "created_at",
        sort_direction: str = "asc",
    ) -> EmployeePage:
        """Filtered, sorted, paginated listing with counts over the filtered set."""
        query = build_list_query(
            page=page,
            page_size=page_size,
            search_text=search_text,
            sort_field=sort_field,
            sort_direction=sort_direction,
            max_page_size=self.max_page_size,
        )
        total = await self.store.count(query.predicate)
        total_active = await self.store.count(query.active_predicate)
        records = []
        # Nothing to fetch past the end; huge offsets also overflow driver integer binds
        if query.offset < total:
            records = await self.store.find_many(
                query.predicate,
                query.sort_field,
                query.sort_direction,
                offset=query.offset,
                limit=query.page_size,
            )
        return EmployeePage(
            records=records,
            total_count=total,
            total_active_count=total_active,
            page=query.page,
            page_size=query.page_size,
        )

    async def _store_image(self, image: bytes, filename: str | None) -> str | None:
        if self.assets is None:
            logger.warning("Image upload ignored: no asset store configured")
            return None
        try:
            return await self.assets.save(image, filename or "")
        except AssetStorageError as e:
            logger.warning(
                f"Image storage unavailable, creating employee without image: {e.message}",
                extra={"error_code": e.code},
            )
            return None

    async def _discard_image(self, ref: str) -> None:
        """Best-effort removal of an image no record points at any more."""
        if self.assets is not None:
            await self.assets.remove(ref)

    async def create_employee(
        self,
        fields: dict,
        image: bytes | None = None,
        image_filename: str | None = None,
    ) -> EmployeeRecord:
        cleaned = validate_new_employee(fields)
        image_ref = None
        if image:
            image_ref = await self._store_image(image, image_filename)
            cleaned["image_ref"] = image_ref
        try:
            record = await self.store.insert(cleaned)
        except Exception:
            if image_ref:
                await self._discard_image(image_ref)
            raise
        logger.info("Employee created", extra={"employee_id": record.id})
        return record

    async def get_employee(self, employee_id: EmployeeId) -> EmployeeRecord:
        return await self.store.find_by_id(employee_id)

    async def update_employee(
        self, employee_id: EmployeeId, changes: dict,
    ) -> EmployeeRecord:
        cleaned = validate_employee_changes(changes)
        if not cleaned:
            return await self.store.find_by_id(employee_id)
        previous_image = None
        if "image_ref" in cleaned:
            previous_image = (await self.store.find_by_id(employee_id)).image_ref
        record = await self.store.update(employee_id, cleaned)
        if previous_image and previous_image != record.image_ref:
            await self._discard_image(previous_image)
        logger.info(
            f"Employee updated ({', '.join(sorted(cleaned))})",
            extra={"employee_id": employee_id},
        )
        return record

    async def toggle_active(self, employee_id: EmployeeId) -> bool:
        """Flip the active flag. Returns the new value."""
        current = await self.store.find_by_id(employee_id)
        updated = await self.store.update(employee_id, {"active": not current.active})
        logger.info(
            f"Employee {'activated' if updated.active else 'deactivated'}",
            extra={"employee_id": employee_id},
        )
        return updated.active

    async def delete_employee(self, employee_id: EmployeeId) -> None:
        record = await self.store.find_by_id(employee_id)
        await self.store.delete(employee_id)
        if record.image_ref:
            await self._discard_image(record.image_ref)
        logger.info("Employee deleted", extra={"employee_id": employee_id})

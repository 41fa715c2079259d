"""
Command pipeline: interpret → match → (snapshot check) → mutate.

Strictly sequential. Every failure before the mutation leaves the catalog
untouched; the mutation is the only write.
"""

from typing import Optional
import structlog

from config import settings
from models.product import Product
from models.command import UpdatePlan
from services.catalog_service import CatalogService
from services.command_interpreter_service import CommandInterpreterService
from services.product_matcher_service import build_update_plan, titles_match
from exceptions import StaleSnapshotError

logger = structlog.get_logger(__name__)


class CommandService:
    """
    Runs one merchant command against a catalog snapshot.

    Usage:
        service = CommandService(interpreter, catalog)
        updated = service.execute("rename the snowboard ...", snapshot)
    """

    def __init__(
        self,
        interpreter: CommandInterpreterService,
        catalog: CatalogService,
        verify_snapshot: Optional[bool] = None
    ):
        self.interpreter = interpreter
        self.catalog = catalog
        self.verify_snapshot = (
            settings.verify_snapshot_before_update
            if verify_snapshot is None else verify_snapshot
        )

    def plan(self, command: str, products: list[Product]) -> UpdatePlan:
        """Interpret and match without writing anything."""
        result = self.interpreter.interpret(command, products)
        return build_update_plan(result, products)

    def execute(self, command: str, products: list[Product]) -> Product:
        """
        Interpret the command and apply the update.

        Args:
            command: Merchant instruction
            products: Snapshot loaded with the page

        Returns:
            Post-update product

        Raises:
            AppError subclasses from each stage; nothing is written on failure
        """
        logger.info("command_started", product_count=len(products))

        plan = self.plan(command, products)

        if self.verify_snapshot:
            self._check_snapshot(plan)

        updated = self.catalog.update_product(
            plan.product_id,
            plan.new_title,
            plan.new_description
        )

        logger.info(
            "command_completed",
            product_id=updated.id,
            old_title=plan.product_title,
            new_title=updated.title
        )
        return updated

    def _check_snapshot(self, plan: UpdatePlan) -> None:
        """Fail if the matched product was renamed or removed since page load."""
        current = self.catalog.get_product(plan.product_id)
        current_title = current.title if current else None

        if not titles_match(current_title, plan.product_title):
            logger.warning(
                "stale_snapshot",
                product_id=plan.product_id,
                expected_title=plan.product_title,
                current_title=current_title
            )
            raise StaleSnapshotError(plan.product_id, plan.product_title, current_title)

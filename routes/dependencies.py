"""
FastAPI dependencies shared by routes.

The store session comes from the host app; override get_shopify_session
(or any dependency below) to plug in a different source or a test double.
"""

from fastapi import Depends

from integrations.shopify import ShopifyAdminClient, ShopifySession, get_shopify_session
from services.catalog_service import CatalogService
from services.command_interpreter_service import (
    CommandInterpreterService,
    get_command_interpreter_service,
)
from services.command_service import CommandService


def get_shopify_client(
    session: ShopifySession = Depends(get_shopify_session)
) -> ShopifyAdminClient:
    return ShopifyAdminClient(session)


def get_catalog(
    client: ShopifyAdminClient = Depends(get_shopify_client)
) -> CatalogService:
    return CatalogService(client)


def get_command_service(
    interpreter: CommandInterpreterService = Depends(get_command_interpreter_service),
    catalog: CatalogService = Depends(get_catalog)
) -> CommandService:
    return CommandService(interpreter, catalog)

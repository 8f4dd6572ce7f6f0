# bike_inventory/domains/org/services.py

"""
Business logic of the 'org' domain.
"""

from typing import Any

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.exceptions import BadRequestError
from bike_inventory.core.service_base import ResourceService
from bike_inventory.domains.inv import crud as inv_crud
from bike_inventory.domains.sal import crud as sal_crud
from bike_inventory.domains.ship import crud as ship_crud
from bike_inventory.domains.usr import crud as usr_crud
from . import crud as org_crud
from . import schemas as org_schemas
from .models import EntityType


banking_detail_service = ResourceService(
    org_crud.banking_detail,
    read_schema=org_schemas.BankingDetailRead,
    create_schema=org_schemas.BankingDetailCreate,
    update_schema=org_schemas.BankingDetailUpdate,
    label="Banking detail",
    plural="banking_details",
)


class OrganizationService(ResourceService[org_schemas.OrganizationRead, org_schemas.OrganizationCreate, org_schemas.OrganizationUpdate]):
    references = {
        "vendor_id": inv_crud.vendor,
        "admin_id": usr_crud.user,
        "banking_id": org_crud.banking_detail,
    }


organization_service = OrganizationService(
    org_crud.organization,
    read_schema=org_schemas.OrganizationRead,
    create_schema=org_schemas.OrganizationCreate,
    update_schema=org_schemas.OrganizationUpdate,
    label="Organization",
    plural="organizations",
)


class EntityBankingService(
    ResourceService[org_schemas.EntityBankingRead, org_schemas.EntityBankingCreate, org_schemas.EntityBankingUpdate]
):
    references = {"banking_id": org_crud.banking_detail}
    unique_together = (("entity_type", "entity_id", "banking_id"),)

    # account holder kinds -> CRUD of their table
    holders = {
        EntityType.VENDOR: inv_crud.vendor,
        EntityType.DEALER: sal_crud.dealer,
        EntityType.CUSTOMER: sal_crud.customer,
        EntityType.ORGANIZATION: org_crud.organization,
        EntityType.SHIPPING_AGENT: ship_crud.shipping_agent,
    }

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        if current is not None:
            return
        if await self.holders[obj_in.entity_type].get(db, obj_in.entity_id) is None:
            raise BadRequestError(f"No active {obj_in.entity_type.value.replace('_', ' ')} with this entity_id")


entity_banking_service = EntityBankingService(
    org_crud.entity_banking,
    read_schema=org_schemas.EntityBankingRead,
    create_schema=org_schemas.EntityBankingCreate,
    update_schema=org_schemas.EntityBankingUpdate,
    label="Entity banking",
    plural="entity_bankings",
)

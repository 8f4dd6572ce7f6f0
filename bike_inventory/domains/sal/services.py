# bike_inventory/domains/sal/services.py

"""
Business logic of the 'sal' domain.

A sale takes its units out of the item's stock in the same commit that
records it, and soft deleting the sale puts them back. The unit price
defaults to the item's price; ``total_amount`` is always computed here.
"""

from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.exceptions import BadRequestError
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.service_base import ResourceService
from bike_inventory.core.storage import ObjectStorage
from bike_inventory.domains.inv import crud as inv_crud
from bike_inventory.domains.org import crud as org_crud
from bike_inventory.domains.ref import crud as ref_crud
from . import crud as sal_crud
from . import schemas as sal_schemas


class CustomerService(ResourceService[sal_schemas.CustomerRead, sal_schemas.CustomerCreate, sal_schemas.CustomerUpdate]):
    references = {"city_id": ref_crud.city}
    unique_fields = ("email", "national_id")


customer_service = CustomerService(
    sal_crud.customer,
    read_schema=sal_schemas.CustomerRead,
    create_schema=sal_schemas.CustomerCreate,
    update_schema=sal_schemas.CustomerUpdate,
    label="Customer",
    plural="customers",
)


class DealerService(ResourceService[sal_schemas.DealerRead, sal_schemas.DealerCreate, sal_schemas.DealerUpdate]):
    references = {"city_id": ref_crud.city}
    unique_fields = ("name",)


dealer_service = DealerService(
    sal_crud.dealer,
    read_schema=sal_schemas.DealerRead,
    create_schema=sal_schemas.DealerCreate,
    update_schema=sal_schemas.DealerUpdate,
    label="Dealer",
    plural="dealers",
)


class DealershipService(
    ResourceService[sal_schemas.DealershipRead, sal_schemas.DealershipCreate, sal_schemas.DealershipUpdate]
):
    references = {
        "dealer_id": sal_crud.dealer,
        "organization_id": org_crud.organization,
        "city_id": ref_crud.city,
    }
    unique_together = (("dealer_id", "name"),)


dealership_service = DealershipService(
    sal_crud.dealership,
    read_schema=sal_schemas.DealershipRead,
    create_schema=sal_schemas.DealershipCreate,
    update_schema=sal_schemas.DealershipUpdate,
    label="Dealership",
    plural="dealerships",
)


class SaleService(ResourceService[sal_schemas.SaleRead, sal_schemas.SaleCreate, sal_schemas.SaleUpdate]):
    references = {
        "item_id": inv_crud.item,
        "customer_id": sal_crud.customer,
        "dealer_id": sal_crud.dealer,
    }

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        fields_set = obj_in.model_fields_set
        customer_id = obj_in.customer_id if current is None or "customer_id" in fields_set else current.customer_id
        dealer_id = obj_in.dealer_id if current is None or "dealer_id" in fields_set else current.dealer_id
        if customer_id is None and dealer_id is None:
            raise BadRequestError("A sale needs a customer_id or a dealer_id")

    async def prepare_create(self, db: AsyncSession, obj_in: BaseModel) -> Dict[str, Any]:
        db_item = await inv_crud.item.get(db, obj_in.item_id)
        if obj_in.quantity > db_item.quantity:
            raise BadRequestError("Sale quantity exceeds the item's stock")
        # committed together with the sale
        db_item.quantity -= obj_in.quantity
        db.add(db_item)

        unit_price = obj_in.unit_price if obj_in.unit_price is not None else db_item.price
        return {"unit_price": unit_price, "total_amount": Decimal(unit_price) * obj_in.quantity}

    async def prepare_update(self, db: AsyncSession, db_obj: Any, obj_in: BaseModel) -> Dict[str, Any]:
        if obj_in.unit_price is None:
            return {}
        return {"total_amount": Decimal(obj_in.unit_price) * db_obj.quantity}

    async def delete(self, db: AsyncSession, storage: ObjectStorage, id: int) -> ApiResponse:
        db_sale = await self.get_or_404(db, id)
        # the item may have been retired since; its stock is still restored
        db_item = await inv_crud.item.get(db, db_sale.item_id, include_deleted=True)
        if db_item is not None:
            db_item.quantity += db_sale.quantity
            db.add(db_item)
        await self.crud.soft_delete(db, db_obj=db_sale)
        message = f"{self.label} soft deleted successfully"
        return ApiResponse.ok(message, MessagePayload(message=message))


sale_service = SaleService(
    sal_crud.sale,
    read_schema=sal_schemas.SaleRead,
    create_schema=sal_schemas.SaleCreate,
    update_schema=sal_schemas.SaleUpdate,
    label="Sale",
    plural="sales",
)

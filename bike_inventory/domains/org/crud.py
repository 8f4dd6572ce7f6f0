# bike_inventory/domains/org/crud.py

"""
CRUD operations of the 'org' domain.
"""

from bike_inventory.core.crud_base import CRUDBase, CRUDWithObjectBase
from . import models as org_models
from . import schemas as org_schemas


class CRUDBankingDetail(CRUDBase[org_models.BankingDetail, org_schemas.BankingDetailCreate, org_schemas.BankingDetailUpdate]):
    def __init__(self):
        super().__init__(model=org_models.BankingDetail)


banking_detail = CRUDBankingDetail()


class CRUDOrganization(CRUDWithObjectBase[org_models.Organization, org_schemas.OrganizationCreate, org_schemas.OrganizationUpdate]):
    def __init__(self):
        super().__init__(model=org_models.Organization, object_field="logo")


organization = CRUDOrganization()


class CRUDEntityBanking(CRUDBase[org_models.EntityBanking, org_schemas.EntityBankingCreate, org_schemas.EntityBankingUpdate]):
    def __init__(self):
        super().__init__(model=org_models.EntityBanking)


entity_banking = CRUDEntityBanking()

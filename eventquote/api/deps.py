from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventquote.core.redis import get_redis
from eventquote.db.session import get_db
from eventquote.services.cache import QuotationCache
from eventquote.services.employee_types import EmployeeTypeLookup
from eventquote.services.parameters import ParametersProvider


def get_parameters_provider(db: AsyncSession = Depends(get_db)) -> ParametersProvider:
    return ParametersProvider(db)


def get_employee_type_lookup(db: AsyncSession = Depends(get_db)) -> EmployeeTypeLookup:
    return EmployeeTypeLookup(db)


def get_quotation_cache() -> QuotationCache:
    return QuotationCache(get_redis())

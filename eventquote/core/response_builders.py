from eventquote.models.quotation import Quotation
from eventquote.models.employee_type import EmployeeType
from eventquote.models.global_parameters import GlobalParameters
from eventquote.models.global_settings import GlobalCommission, GlobalFixedExpense
from eventquote.models.operational_cost_concept import OperationalCostConcept
from eventquote.models.user import User
from eventquote.schemas.auth import UserOut
from eventquote.schemas.employee_type import EmployeeTypeOut
from eventquote.schemas.global_settings import CommissionOut, FixedExpenseOut
from eventquote.schemas.operational_cost_concept import OperationalCostConceptOut
from eventquote.schemas.parameters import GlobalParametersOut
from eventquote.schemas.quotation_record import QuotationOut
from eventquote.schemas.reporting import RecentQuotation


def build_quotation_response(quotation: Quotation) -> QuotationOut:
    return QuotationOut.model_validate(quotation)


def build_quotation_response_list(quotations: list) -> list:
    return [build_quotation_response(q) for q in quotations]


def build_recent_quotation(quotation: Quotation) -> RecentQuotation:
    return RecentQuotation(
        id=quotation.id,
        name=quotation.name,
        event_type=quotation.event_type,
        status=quotation.status,
        payment_status=quotation.payment_status,
        ticket_quantity=quotation.ticket_quantity,
        gross_profitability=quotation.gross_profitability,
        created_by=quotation.created_by,
        created_at=quotation.created_at,
    )


def build_employee_type_response(employee_type: EmployeeType) -> EmployeeTypeOut:
    return EmployeeTypeOut(
        id=employee_type.id,
        name=employee_type.name,
        is_operator=employee_type.is_operator,
        cost_per_day=employee_type.cost_per_day,
        created_by=employee_type.created_by,
        created_at=employee_type.created_at,
        updated_at=employee_type.updated_at,
    )


def build_parameters_response(parameters: GlobalParameters) -> GlobalParametersOut:
    return GlobalParametersOut.model_validate(parameters)


def build_user_response(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        created_at=user.created_at,
    )


def build_commission_response(commission: GlobalCommission) -> CommissionOut:
    return CommissionOut.model_validate(commission)


def build_fixed_expense_response(expense: GlobalFixedExpense) -> FixedExpenseOut:
    return FixedExpenseOut.model_validate(expense)


def build_operational_cost_concept_response(concept: OperationalCostConcept) -> OperationalCostConceptOut:
    return OperationalCostConceptOut(
        id=concept.id,
        name=concept.name,
        description=concept.description,
        created_by=concept.created_by,
        created_at=concept.created_at,
        updated_at=concept.updated_at,
    )

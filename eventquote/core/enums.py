from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    QUOTER = "quoter"

    def __str__(self):
        return self.value


class EventType(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    def __str__(self):
        return self.value


class PlatformName(str, Enum):
    TICKET_PLUS = "TICKET_PLUS"
    PALCO4 = "PALCO4"

    def __str__(self):
        return self.value


class ChargedTo(str, Enum):
    US = "US"
    CLIENT = "CLIENT"
    CONSUMER = "CONSUMER"

    def __str__(self):
        return self.value


class CostCalculationType(str, Enum):
    FIXED = "FIXED"
    PERCENTAGE = "PERCENTAGE"
    PER_DAY = "PER_DAY"
    PER_DAY_PER_PERSON = "PER_DAY_PER_PERSON"
    PER_TICKET_SYSTEM = "PER_TICKET_SYSTEM"
    PER_TICKET_SECTOR = "PER_TICKET_SECTOR"

    def __str__(self):
        return self.value


class QuotationStatus(str, Enum):
    DRAFT = "DRAFT"
    REVIEW = "REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    def __str__(self):
        return self.value


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PAID = "PAID"

    def __str__(self):
        return self.value


class DateMode(str, Enum):
    CREATION = "creation"
    PAYMENT = "payment"

    def __str__(self):
        return self.value


class AuditAction(str, Enum):
    CREATE_QUOTATION = "create_quotation"
    DELETE_QUOTATION = "delete_quotation"
    UPDATE_QUOTATION_STATUS = "update_quotation_status"
    UPDATE_PAYMENT_STATUS = "update_payment_status"
    UPDATE_PARAMETERS = "update_parameters"
    CREATE_EMPLOYEE_TYPE = "create_employee_type"
    UPDATE_EMPLOYEE_TYPE = "update_employee_type"
    DELETE_EMPLOYEE_TYPE = "delete_employee_type"
    REPLACE_COMMISSIONS = "replace_commissions"
    REPLACE_FIXED_EXPENSES = "replace_fixed_expenses"
    CREATE_OPERATIONAL_COST_CONCEPT = "create_operational_cost_concept"
    UPDATE_OPERATIONAL_COST_CONCEPT = "update_operational_cost_concept"
    DELETE_OPERATIONAL_COST_CONCEPT = "delete_operational_cost_concept"
    REGISTER = "register"
    LOGIN = "login"

    def __str__(self):
        return self.value

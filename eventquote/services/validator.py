from typing import Any

from pydantic import ValidationError

from eventquote.core.errors import InputValidationError, format_pydantic_errors
from eventquote.schemas.quotation import QuotationInput


def parse_quotation_input(raw: Any) -> QuotationInput:
    """Parse an untyped request body into a QuotationInput.

    Raises InputValidationError carrying every violation pydantic found, each
    with the dotted path of the offending field.
    """
    if not isinstance(raw, dict):
        raise InputValidationError([{
            "field": "__root__",
            "message": "Request body must be a JSON object",
            "type": "dict_type",
        }])
    try:
        return QuotationInput.model_validate(raw)
    except ValidationError as exc:
        raise InputValidationError(format_pydantic_errors(exc.errors())) from exc

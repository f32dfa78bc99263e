from .validators import (
    validate_date,
    validate_numeric_input,
    validate_party_size,
    validate_phone_number,
    validate_reservation_id,
    validate_time,
)

__all__ = [
    "validate_date",
    "validate_numeric_input",
    "validate_party_size",
    "validate_phone_number",
    "validate_reservation_id",
    "validate_time",
]

import json
from pathlib import Path
from typing import Callable, Optional, Type, Union

from pydantic import BaseModel, RootModel

from TableOPS_V1.rules.validators import validate_numeric_input


def get_input(
    input_message: str,
    min_value: int,
    max_value: int,
    error_message: str = "Invalid choice.",
    on_error: Optional[Callable[[], None]] = None,
) -> int:
    """Prompt until the user types an integer in ``[min_value, max_value]``.

    - input_message: prompt shown to the user
    - error_message: message displayed on invalid input
    - on_error: optional callback run after each rejected entry (audit)
    """
    while True:
        result = validate_numeric_input(input(input_message), min_value, max_value)
        if result is not None:
            return result
        print(error_message)
        if on_error is not None:
            on_error()


def get_text(
    input_message: str,
    fn_validation: Callable[[str], bool],
    error_message: str,
    keep_sentinel: Optional[str] = None,
    on_error: Optional[Callable[[], None]] = None,
) -> Optional[str]:
    """Prompt for a free-form value until ``fn_validation`` accepts it.

    When ``keep_sentinel`` is given and typed as is, returns None, which the
    update flows read as "keep the current value".
    """
    while True:
        text = input(input_message)
        if keep_sentinel is not None and text == keep_sentinel:
            return None
        if fn_validation(text):
            return text
        print(error_message)
        if on_error is not None:
            on_error()


def ask_yes_no(input_message: str, accept_short: bool = False) -> bool:
    """True for "Yes"/"yes" (and "y"/"Y" family when ``accept_short``)."""
    answer = input(input_message).strip()
    if accept_short:
        return answer.lower() in ("yes", "y")
    return answer in ("Yes", "yes")


def load_and_validate(
    data_path: Path, model: Union[Type[RootModel], Type[BaseModel]]
) -> BaseModel:
    """
    Load and validate model data from data_path.
    Returns a validated model instance.
    """
    data_path = Path(data_path)
    if not data_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {data_path}")

    with data_path.open("r", encoding="utf-8") as f:
        raw_data = json.load(f)
        return model.model_validate(raw_data)

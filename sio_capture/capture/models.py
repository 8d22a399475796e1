from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_optional_text(v: Any) -> Optional[str]:
    # Le front peut envoyer un nombre (19) ou une chaîne ("19.00")
    if v is None or isinstance(v, bool):
        return None
    text = str(v).strip()
    return text or None


class CaptureOrderBody(BaseModel):
    """Corps de POST /capture-paypal-order (noms de champs du front conservés)."""
    model_config = ConfigDict(populate_by_name=True)

    order_id: Optional[str] = Field(default=None, alias="orderID")
    expected_amount: Optional[str] = Field(default=None, alias="expectedAmount")
    email: Optional[str] = None

    @field_validator("order_id", "expected_amount", "email", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)


class CreateOrderBody(BaseModel):
    """Corps de POST /create-paypal-order."""
    model_config = ConfigDict(populate_by_name=True)

    amount: Optional[Union[str, float, int]] = None
    has_bump: bool = Field(default=False, alias="hasBump")

    @field_validator("has_bump", mode="before")
    @classmethod
    def _coerce_bump(cls, v: Any) -> bool:
        # Sémantique "truthy" du front (null, "", 0 => pas de bump)
        return bool(v)

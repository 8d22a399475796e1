from decimal import Decimal, InvalidOperation
from typing import Any, Optional

TWO_PLACES = Decimal("0.01")


# module sio_capture.utils.amounts
def normalize_amount(value: Any) -> Optional[str]:
    """
    Normalise un montant en chaîne à deux décimales ("19" / "19.0" / 19 -> "19.00").
    - None ou chaîne vide -> None
    - Valeur non numérique, hors précision Decimal ou avec des fractions de centime
      ("19.004") -> renvoyée telle quelle (str), jamais arrondie
    """
    if value is None or isinstance(value, bool):
        return None
    raw = str(value).strip()
    if not raw:
        return None
    try:
        parsed = Decimal(raw)
        if not parsed.is_finite():
            return raw
        quantized = parsed.quantize(TWO_PLACES)
    except InvalidOperation:
        return raw
    if quantized != parsed:
        return raw
    return str(quantized)

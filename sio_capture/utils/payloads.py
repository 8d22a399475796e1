"""
Accès total aux payloads semi-structurés (PayPal, systeme.io).
Aucune exception ne remonte: un chemin absent ou mal formé renvoie `default`.
"""
from typing import Any

# module sio_capture.utils.payloads
def dig(obj: Any, *path: Any, default: Any = None) -> Any:
    """
    Parcourt obj selon path (clés de dict ou index de liste).
    - dig(details, "purchase_units", 0, "payments", "captures", 0, "status")
    - Retourne default si un maillon manque ou n'a pas le bon type.
    """
    cur = obj
    for key in path:
        if isinstance(key, int):
            if not isinstance(cur, (list, tuple)) or not -len(cur) <= key < len(cur):
                return default
            cur = cur[key]
        else:
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
    return default if cur is None else cur


def as_text(value: Any) -> str:
    """Chaîne nettoyée, jamais None (les valeurs non textuelles sont ignorées)."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""

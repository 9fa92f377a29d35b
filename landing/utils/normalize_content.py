# landing/utils/normalize_content.py
# Capa de compatibilidad para contenido legacy: colapsa wrappers tipo
# {"title": {"title": "Hola"}} o {"icon": {"value": "Leaf"}} al escalar que espera el renderer.
from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES = (str, int, float, bool)

_MISSING = object()


def is_primitive(value: Any) -> bool:
    return isinstance(value, _PRIMITIVE_TYPES)


def _try_extract_primitive(obj: dict, parent_key: Optional[str]) -> Any:
    """
    Solo un dict con UNA clave puede colapsar; los dicts multi-clave son
    registros estructurales ({icon, text}, {label, href}) y se conservan.
    """
    if len(obj) != 1:
        return _MISSING

    if parent_key and parent_key in obj and is_primitive(obj[parent_key]):
        return obj[parent_key]

    (only_value,) = obj.values()
    if is_primitive(only_value):
        return only_value

    return _MISSING


def _normalize(value: Any, parent_key: Optional[str], path: Tuple[str, ...]) -> Any:
    if value is None or is_primitive(value):
        return value

    if isinstance(value, list):
        return [_normalize(item, parent_key, path) for item in value]

    if isinstance(value, dict):
        # hijos primero (bottom-up) para que el resultado sea un punto fijo
        out = {
            str(key): _normalize(nested, str(key), path + (str(key),))
            for key, nested in value.items()
        }
        # el registro raíz nunca colapsa: {"ctaLabel": "Buy"} es contenido legítimo
        if parent_key is None:
            return out

        primitive = _try_extract_primitive(out, parent_key)
        if primitive is not _MISSING:
            logger.debug("normalize_content collapsed wrapper at %s", ".".join(path) or "<root>")
            return primitive
        return out

    # tipos no-JSON (Decimal, datetime, ...) se devuelven tal cual
    return value


def normalize_content(value: Any, parent_key: Optional[str] = None) -> Any:
    """
    Normaliza un valor JSON arbitrario. Pura, recursiva y total.

    - None / primitivos: tal cual.
    - Listas: se normaliza cada elemento con el mismo parent_key.
    - Dicts anidados con una sola clave primitiva: colapsan a ese primitivo
      (prefiriendo la clave igual al parent_key).
    - Dicts multi-clave y el registro raíz: se conservan, normalizando sus valores.

    normalize_content(normalize_content(x)) == normalize_content(x).
    """
    path: Tuple[str, ...] = (parent_key,) if parent_key else ()
    return _normalize(value, parent_key, path)

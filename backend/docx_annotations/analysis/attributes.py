from typing import Optional, Union

from docx_annotations.analysis.xml_events import EmptyTag, StartTag, qn
from docx_annotations.core.errors import MalformedAttributeError


# Procura o atributo pelo nome qualificado, pelo nome simples ou por qualquer namespace.
def _find_attr(event: Union[StartTag, EmptyTag], key: str) -> Optional[str]:
    attrs = event.attributes
    val = attrs.get(qn(key))
    if val is not None:
        return val
    val = attrs.get(key)
    if val is not None:
        return val
    for attr_key, value in attrs.items():
        if attr_key.endswith(f"}}{key}"):
            return value
    return None


def get_attr(event: Union[StartTag, EmptyTag], key: str) -> str:
    """Retorna o valor do atributo ``key`` ou levanta MalformedAttributeError."""
    val = _find_attr(event, key)
    if val is None:
        raise MalformedAttributeError(event.name, key)
    return val


def get_int_attr(event: Union[StartTag, EmptyTag], key: str) -> int:
    val = get_attr(event, key)
    stripped = val.strip()
    if not (stripped.isascii() and stripped.isdigit()):
        raise MalformedAttributeError(event.name, key, val)
    return int(stripped)

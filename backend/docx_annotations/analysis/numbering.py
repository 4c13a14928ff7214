import logging
from typing import Dict, List, Optional, Tuple, Union

from docx_annotations.analysis.attributes import get_attr, get_int_attr
from docx_annotations.analysis.xml_events import EmptyTag, EndTag, StartTag, iter_events
from docx_annotations.core.errors import MalformedStructureError
from docx_annotations.models.pydantic_models import NumberingEntry, NumFmt

logger = logging.getLogger(__name__)

# numbering.xml mapeia "numId" -> "abstractNumId" e depois "abstractNumId" -> formatos.
# As duas tabelas sao montadas numa unica leitura e so depois unidas, pois
# referencias para frente sao validas nos dois sentidos.


def read_numbering(part_text: Union[str, bytes]) -> Tuple[Dict[int, int], Dict[int, List[str]]]:
    con_abs_map: Dict[int, int] = {}
    abs_fmt_map: Dict[int, List[str]] = {}

    abstract_num_id: Optional[int] = None
    num_id: Optional[int] = None
    fmt: List[str] = []  # formato por nivel de indentacao (a partir do nivel 0)

    for event in iter_events(part_text):
        if isinstance(event, (StartTag, EmptyTag)):
            tag_name = event.name
            if tag_name == 'abstractNum':
                abstract_num_id = get_int_attr(event, 'abstractNumId')
                fmt = []
                if isinstance(event, EmptyTag):
                    abs_fmt_map[abstract_num_id] = fmt
                    abstract_num_id = None
            elif tag_name == 'numFmt' and abstract_num_id is not None:
                # ignora w:ilvl; assume que os niveis aparecem em ordem 0..n
                fmt.append(get_attr(event, 'val'))
            elif tag_name == 'num' and isinstance(event, StartTag):
                num_id = get_int_attr(event, 'numId')
            elif tag_name == 'abstractNumId':
                if num_id is None:
                    raise MalformedStructureError("w:abstractNumId encontrado fora de um w:num")
                if num_id in con_abs_map:
                    logger.debug("numId %d redefinido; mantendo a ultima definicao", num_id)
                con_abs_map[num_id] = get_int_attr(event, 'val')
                num_id = None

        elif isinstance(event, EndTag):
            if event.name == 'abstractNum' and abstract_num_id is not None:
                abs_fmt_map[abstract_num_id] = fmt
                abstract_num_id = None
                fmt = []
            elif event.name == 'num':
                num_id = None

    return con_abs_map, abs_fmt_map


# Une as duas tabelas (estilo SQL) usando apenas o formato do nivel 0.
def join_numbering(con_abs_map: Dict[int, int], abs_fmt_map: Dict[int, List[str]]) -> Dict[int, NumberingEntry]:
    res: Dict[int, NumberingEntry] = {}
    for con_id, abs_id in con_abs_map.items():
        fmt_levels = abs_fmt_map.get(abs_id)
        if fmt_levels is None:
            raise MalformedStructureError(
                f"abstractNumId {abs_id} referenciado pelo numId {con_id} mas nao definido"
            )
        if not fmt_levels:
            raise MalformedStructureError(f"abstractNumId {abs_id} nao contem nenhum formato")
        res[con_id] = NumberingEntry(num_id=con_id, format=NumFmt.read(fmt_levels[0]))
    return res


def extract_numbering(part_text: Union[str, bytes]) -> Dict[int, NumberingEntry]:
    con_abs_map, abs_fmt_map = read_numbering(part_text)
    return join_numbering(con_abs_map, abs_fmt_map)

"""
Extracao de trechos realcados (w:highlight) do word/document.xml.

Runs consecutivos com a mesma cor, sem run de outra cor entre eles, sao
unidos em um unico HighlightedRun. Os nomes das cores sao internados em uma
ColorTable (ids na ordem da primeira ocorrencia, a partir de 0).
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from docx_annotations.analysis.attributes import get_attr
from docx_annotations.analysis.extractor_base import PartExtractor
from docx_annotations.analysis.xml_events import (
    EmptyTag,
    EndOfStream,
    EndTag,
    StartTag,
    Text,
    XmlEvent,
)
from docx_annotations.core.config import settings
from docx_annotations.models.pydantic_models import AnomalyKind, HighlightedRun

logger = logging.getLogger(__name__)


class ColorTable:
    def __init__(self):
        self.ids: Dict[str, int] = {}

    def __len__(self):
        return len(self.ids)

    def intern(self, name: str) -> int:
        if name not in self.ids:
            self.ids[name] = len(self.ids)
        return self.ids[name]

    def invert(self, extractor: Optional[PartExtractor] = None) -> Dict[int, str]:
        """Retorna o mapa id -> nome; em caso de colisao a ultima entrada vence."""
        inverted: Dict[int, str] = {}
        for name, color_id in self.ids.items():
            if color_id in inverted:
                message = f"colisao ao inverter a tabela de cores: id {color_id} ({inverted[color_id]!r}, {name!r})"
                if extractor is not None:
                    extractor._report(AnomalyKind.COLOR_COLLISION, message)
                else:
                    logger.warning(message)
            inverted[color_id] = name
        return inverted


def color_name(colors: Dict[int, str], run: HighlightedRun) -> str:
    return colors.get(run.color_id, settings.UNKNOWN_COLOR_LABEL)


class ToRead(Enum):
    NO_READ = 0
    NEXT_TEXT_LEAF = 1
    NEXT_TEXT = 2


class HighlightExtractor(PartExtractor):
    def reset(self):
        super().reset()
        self.color_table = ColorTable()
        self.colors: Dict[int, str] = {}
        self.buffer: List[str] = []
        self.current_color: Optional[int] = None
        self.previous_color: Optional[int] = None
        self.to_read = ToRead.NO_READ
        self.in_run = False
        self.run_has_props = False
        # formatacao antiga de uma revisao (w:rPrChange) nao e a do run
        self.in_props_change = False

    @property
    def _in_run_props(self) -> bool:
        return self.in_run and not self.in_props_change

    # Fecha o trecho anterior quando a cor muda em relacao ao run anterior.
    def _compare_and_flush(self):
        if self.current_color == self.previous_color:
            return
        if self.previous_color is not None:
            self.records.append(HighlightedRun(color_id=self.previous_color, text=''.join(self.buffer)))
            self.buffer = []

    def consume(self, events: Iterable[XmlEvent]):
        for event in events:
            if isinstance(event, (StartTag, EmptyTag)):
                tag_name = event.name
                if tag_name == 'r' and isinstance(event, StartTag):
                    self.in_run = True
                    self.run_has_props = False
                    self.in_props_change = False
                    self.current_color = None
                    self.to_read = ToRead.NO_READ
                elif tag_name == 'rPrChange' and isinstance(event, StartTag):
                    self.in_props_change = True
                elif tag_name == 'highlight' and self._in_run_props:
                    # esperado dentro de <w:r><w:rPr>, ex.: yellow, red
                    self.current_color = self.color_table.intern(get_attr(event, 'val'))
                    self.to_read = ToRead.NEXT_TEXT_LEAF
                elif tag_name == 't' and isinstance(event, StartTag):
                    if self.to_read == ToRead.NEXT_TEXT_LEAF:
                        self.to_read = ToRead.NEXT_TEXT
                if isinstance(event, EmptyTag) and tag_name == 'rPr' and self._in_run_props:
                    self.run_has_props = True
                    self._compare_and_flush()

            elif isinstance(event, EndTag):
                tag_name = event.name
                if tag_name == 'rPrChange':
                    self.in_props_change = False
                elif tag_name == 'rPr' and self._in_run_props:
                    self.run_has_props = True
                    self._compare_and_flush()
                elif tag_name == 'r':
                    if not self.run_has_props:
                        self._compare_and_flush()
                    self.previous_color = self.current_color
                    self.in_run = False
                elif tag_name == 't' and self.to_read == ToRead.NEXT_TEXT:
                    self.to_read = ToRead.NO_READ

            elif isinstance(event, Text):
                if self.to_read == ToRead.NEXT_TEXT:
                    self.buffer.append(event.text)
                    self.to_read = ToRead.NO_READ

            elif isinstance(event, EndOfStream):
                # grava o buffer depois do ultimo run
                if self.previous_color is not None:
                    self.records.append(HighlightedRun(color_id=self.previous_color, text=''.join(self.buffer)))
                    self.buffer = []
                self.colors = self.color_table.invert(self)
        return self


def extract_highlights(part_text: Union[str, bytes]) -> Tuple[Dict[int, str], List[HighlightedRun]]:
    extractor = HighlightExtractor().process(part_text)
    return extractor.colors, extractor.get_records()

"""
Fonte de eventos XML sobre uma parte do pacote.

Usa a interface de "parser target" do lxml (estilo SAX) alimentada em blocos,
de modo que a sequencia de eventos e produzida sob demanda e percorrida uma
unica vez. Elementos auto-fechados viram EmptyTag e texto consecutivo vira um
unico Text com as entidades ja decodificadas.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from lxml import etree

from docx_annotations.core.config import settings
from docx_annotations.core.errors import MalformedXmlError

NAMESPACES = {
    'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main',
}


def qn(tag):
    return f"{{{NAMESPACES['w']}}}{tag}"


# Extrai o nome local de uma tag XML considerando namespaces.
def _local_name(tag: str) -> str:
    if isinstance(tag, str) and '}' in tag:
        return tag.rsplit('}', 1)[1]
    return tag


@dataclass(frozen=True)
class StartTag:
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return _local_name(self.tag)


@dataclass(frozen=True)
class EmptyTag:
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return _local_name(self.tag)


@dataclass(frozen=True)
class EndTag:
    tag: str

    @property
    def name(self) -> str:
        return _local_name(self.tag)


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class EndOfStream:
    pass


XmlEvent = Union[StartTag, EmptyTag, EndTag, Text, EndOfStream]


class _EventCollector:
    """Target do lxml que converte callbacks em eventos.

    A abertura de um elemento fica pendente ate o proximo callback: se o
    elemento fecha sem filhos nem texto ele e emitido como EmptyTag.
    """

    def __init__(self):
        self.events: List[XmlEvent] = []
        self._pending: Optional[StartTag] = None
        self._text: List[str] = []

    def _flush_pending(self):
        if self._pending is not None:
            self.events.append(self._pending)
            self._pending = None

    def _flush_text(self):
        if self._text:
            self.events.append(Text(''.join(self._text)))
            self._text = []

    def start(self, tag, attrib):
        self._flush_text()
        self._flush_pending()
        self._pending = StartTag(tag, dict(attrib))

    def data(self, data):
        self._flush_pending()
        self._text.append(data)

    def end(self, tag):
        if self._pending is not None:
            self.events.append(EmptyTag(self._pending.tag, self._pending.attributes))
            self._pending = None
            return
        self._flush_text()
        self.events.append(EndTag(tag))

    def close(self):
        self._flush_text()
        self._flush_pending()

    def drain(self) -> List[XmlEvent]:
        events, self.events = self.events, []
        return events


def iter_events(part_text: Union[str, bytes], chunk_size: Optional[int] = None) -> Iterator[XmlEvent]:
    """Gera os eventos da parte, terminando sempre com EndOfStream."""
    data = part_text.encode('utf-8') if isinstance(part_text, str) else bytes(part_text)
    chunk_size = chunk_size or settings.XML_CHUNK_SIZE

    collector = _EventCollector()
    parser = etree.XMLParser(target=collector, resolve_entities=False, no_network=True, huge_tree=True)
    view = memoryview(data)
    try:
        for offset in range(0, len(data), chunk_size):
            parser.feed(bytes(view[offset:offset + chunk_size]))
            yield from collector.drain()
        parser.close()
    except etree.XMLSyntaxError as exc:
        raise MalformedXmlError(f"XML malformado: {exc}") from exc
    yield from collector.drain()
    yield EndOfStream()

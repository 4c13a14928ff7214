from typing import Iterable, List, Optional, Union

from docx_annotations.analysis.attributes import get_int_attr
from docx_annotations.analysis.extractor_base import PartExtractor
from docx_annotations.analysis.ranges import RangeOverlapTracker
from docx_annotations.analysis.xml_events import (
    EmptyTag,
    EndOfStream,
    EndTag,
    StartTag,
    Text,
    XmlEvent,
)
from docx_annotations.models.pydantic_models import AnomalyKind, Comment, CommentedRange

# Modulo responsavel por ler os comentarios (word/comments.xml) e os trechos
# do documento referenciados por eles (word/document.xml).


# Extrator plano: cada w:comment vira um Comment com seus w:t unidos por quebra de linha.
class CommentExtractor(PartExtractor):
    def reset(self):
        super().reset()
        self.current_id: Optional[int] = None
        self.fragments: List[str] = []
        self.to_read = False

    def _commit_comment(self):
        if self.current_id is None:
            self._report(AnomalyKind.UNBALANCED_RANGE, "fim de comentario sem abertura correspondente")
            return
        self.records.append(Comment(id=self.current_id, text="\n".join(self.fragments)))
        self.current_id = None
        self.fragments = []

    def consume(self, events: Iterable[XmlEvent]):
        for event in events:
            if isinstance(event, (StartTag, EmptyTag)):
                tag_name = event.name
                if tag_name == 'comment':
                    self.current_id = get_int_attr(event, 'id')
                    self.fragments = []
                    if isinstance(event, EmptyTag):
                        self._commit_comment()
                elif tag_name == 't' and isinstance(event, StartTag):
                    self.to_read = True

            elif isinstance(event, EndTag):
                if event.name == 'comment':
                    self._commit_comment()
                elif event.name == 't':
                    self.to_read = False

            elif isinstance(event, Text):
                if self.to_read:
                    self.fragments.append(event.text)
                    self.to_read = False

            elif isinstance(event, EndOfStream):
                if self.fragments:
                    self._report(
                        AnomalyKind.UNCLOSED_COMMENT,
                        f"apos ler todos os comentarios o buffer ainda continha: {''.join(self.fragments)!r}",
                    )
        return self


class CommentedRangeExtractor(PartExtractor):
    """Coleta o texto referenciado por cada comentario.

    Os intervalos de comentario podem se sobrepor; o RangeOverlapTracker
    distribui o texto lido para todos os intervalos abertos. O resultado sai
    na ordem de fechamento dos intervalos.
    """

    def reset(self):
        super().reset()
        self.tracker = RangeOverlapTracker()
        self.to_read = False

    def consume(self, events: Iterable[XmlEvent]):
        for event in events:
            if isinstance(event, (StartTag, EmptyTag)):
                tag_name = event.name
                if tag_name == 'commentRangeStart':
                    self.tracker.open(get_int_attr(event, 'id'))
                elif tag_name == 'commentRangeEnd':
                    range_id = get_int_attr(event, 'id')
                    text = self.tracker.close(range_id)
                    if text is None:
                        self._report(
                            AnomalyKind.UNBALANCED_RANGE,
                            f"comentario {range_id} fechado, mas nao estava aberto",
                        )
                    else:
                        self.records.append(CommentedRange(id=range_id, text=text))
                elif tag_name == 't' and isinstance(event, StartTag):
                    # Texto fora de qualquer intervalo nunca e distribuido
                    self.to_read = self.tracker.has_open

            elif isinstance(event, EndTag):
                if event.name == 't':
                    self.to_read = False

            elif isinstance(event, Text):
                if self.to_read:
                    self.tracker.add_text(event.text)
                    self.to_read = False

            elif isinstance(event, EndOfStream):
                self._check_leftovers()
        return self

    def _check_leftovers(self):
        if self.tracker.pending_text:
            self._report(
                AnomalyKind.TRAILING_TEXT,
                f"apos ler todos os intervalos o buffer ainda continha: {''.join(self.tracker.pending_text)!r}",
            )
        if self.tracker.open_ranges:
            open_ids = sorted(self.tracker.open_ranges)
            self._report(
                AnomalyKind.UNBALANCED_RANGE,
                f"{len(open_ids)} comentarios nao foram fechados: {open_ids}",
            )


def extract_comments(part_text: Union[str, bytes]) -> List[Comment]:
    return CommentExtractor().process(part_text).get_records()


def extract_commented_ranges(part_text: Union[str, bytes]) -> List[CommentedRange]:
    return CommentedRangeExtractor().process(part_text).get_records()

import logging
from typing import Dict, List, Tuple

from docx_annotations.analysis.docx_comments import CommentExtractor, CommentedRangeExtractor
from docx_annotations.analysis.highlights import HighlightExtractor
from docx_annotations.analysis.numbering import extract_numbering
from docx_annotations.analysis.package_reader import Container, find_part, read_part
from docx_annotations.core.config import settings
from docx_annotations.models.pydantic_models import (
    Comment,
    CommentedRange,
    CommentPair,
    HighlightedRun,
    NumberingEntry,
)

logger = logging.getLogger(__name__)

# Pontos de entrada por pacote: cada chamada abre o arquivo, le uma unica parte
# e roda um extrator novo sobre ela. Nenhum estado e compartilhado entre chamadas.


def run_comments(container: Container) -> CommentExtractor:
    part = settings.COMMENTS_PART
    extractor = CommentExtractor(part)
    xml_data = find_part(container, part)
    # documentos sem comentarios podem nao ter esta parte
    if xml_data is None:
        return extractor
    extractor.process(xml_data)
    logger.info("%d comentarios lidos de %s", len(extractor.records), part)
    return extractor


def run_commented(container: Container) -> CommentedRangeExtractor:
    part = settings.DOCUMENT_PART
    extractor = CommentedRangeExtractor(part)
    extractor.process(read_part(container, part))
    logger.info("%d trechos comentados lidos de %s", len(extractor.records), part)
    return extractor


def run_highlights(container: Container) -> HighlightExtractor:
    part = settings.DOCUMENT_PART
    extractor = HighlightExtractor(part)
    extractor.process(read_part(container, part))
    logger.info("%d trechos realcados em %d cores", len(extractor.records), len(extractor.colors))
    return extractor


def open_comments(container: Container) -> List[Comment]:
    return run_comments(container).get_records()


def open_commented(container: Container) -> List[CommentedRange]:
    return run_commented(container).get_records()


def open_highlighted(container: Container) -> Tuple[Dict[int, str], List[HighlightedRun]]:
    extractor = run_highlights(container)
    return extractor.colors, extractor.get_records()


def open_numbering(container: Container) -> Dict[int, NumberingEntry]:
    entries = extract_numbering(read_part(container, settings.NUMBERING_PART))
    logger.info("%d numeracoes lidas de %s", len(entries), settings.NUMBERING_PART)
    return entries


def open_comment_pairs(container: Container) -> List[CommentPair]:
    """Une cada comentario ao trecho que ele referencia, pelo id, na ordem dos comentarios."""
    comments = open_comments(container)
    if not comments:
        return []
    commented = {rng.id: rng.text for rng in open_commented(container)}
    return [
        CommentPair(id=comment.id, comment=comment.text, commented=commented.get(comment.id, ""))
        for comment in comments
    ]


# TODO: usar um escape completo de string C em vez de tratar so aspas e quebras de linha
def escape_as_cstr(text: str) -> str:
    return text.replace('"', '\\"').replace('\n', '\\n')

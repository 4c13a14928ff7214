"""CLI: le comentarios, trechos comentados, realces e numeracoes de um .docx."""

import argparse
import logging
import sys
from typing import List, Optional

from docx_annotations.analysis.highlights import color_name
from docx_annotations.analysis.orchestrator import (
    escape_as_cstr,
    open_comment_pairs,
    open_commented,
    open_comments,
    open_highlighted,
    open_numbering,
)
from docx_annotations.core.config import settings
from docx_annotations.core.errors import ExtractionError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readdocx-annotations",
        description="Extrai anotacoes (comentarios, realces, numeracoes) de um arquivo .docx.",
    )
    parser.add_argument("file", nargs="?", help="Caminho do arquivo .docx")
    parser.add_argument("-c", "--comments", action="store_true", help="extrai os comentarios")
    parser.add_argument("-d", "--commented", action="store_true",
                        help="extrai os trechos referenciados pelos comentarios")
    parser.add_argument("-H", "--highlights", action="store_true", help="extrai os trechos realcados")
    parser.add_argument("-n", "--numbering", action="store_true", help="extrai os formatos de numeracao")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


# Imprime os registros de um unico modo; comentario + trecho juntos usam o id como chave.
def _print_records(args) -> None:
    path = args.file
    if args.comments and args.commented:
        for pair in open_comment_pairs(path):
            print(f'{pair.id} "{escape_as_cstr(pair.comment)}" "{escape_as_cstr(pair.commented)}"')
        return
    if args.comments:
        for comment in open_comments(path):
            print(f'{comment.id} "{escape_as_cstr(comment.text)}"')
        return
    if args.commented:
        for rng in open_commented(path):
            print(f'{rng.id} "{escape_as_cstr(rng.text)}"')
        return
    if args.highlights:
        colors, runs = open_highlighted(path)
        for run in runs:
            print(f'{color_name(colors, run)} "{escape_as_cstr(run.text)}"')
        return
    if args.numbering:
        entries = open_numbering(path)
        for num_id in sorted(entries):
            print(f"{num_id} {entries[num_id].format.value}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    has_mode = args.comments or args.commented or args.highlights or args.numbering
    if not args.file or not has_mode:
        parser.print_help()
        return 0

    try:
        _print_records(args)
    except ExtractionError as exc:
        logger.error("Falha ao ler %s: %s", args.file, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

import io
import logging
import os
import zipfile
from typing import BinaryIO, Optional, Union

from docx_annotations.core.errors import ArchiveError, PartNotFoundError

logger = logging.getLogger(__name__)

Container = Union[str, os.PathLike, bytes, BinaryIO]


# Abre o pacote zip a partir de caminho, bytes ou arquivo binario.
def _open_archive(container: Container) -> zipfile.ZipFile:
    source = io.BytesIO(container) if isinstance(container, (bytes, bytearray)) else container
    try:
        return zipfile.ZipFile(source)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveError(f"nao foi possivel abrir o pacote: {exc}") from exc


def find_part(container: Container, name: str) -> Optional[bytes]:
    """Le uma parte nomeada do pacote por inteiro; None se ela nao existir.

    O arquivo fica aberto apenas durante a chamada.
    """
    with _open_archive(container) as zf:
        if name not in zf.namelist():
            logger.debug("Parte %s ausente no pacote", name)
            return None
        try:
            data = zf.read(name)
        except (OSError, zipfile.BadZipFile) as exc:
            raise ArchiveError(f"falha ao ler {name}: {exc}") from exc
    # Parte vazia equivale a parte ausente
    if not data:
        logger.debug("Parte %s vazia no pacote", name)
        return None
    logger.debug("Parte %s lida (%d bytes)", name, len(data))
    return data


# Variante obrigatoria: a ausencia da parte e um erro.
def read_part(container: Container, name: str) -> bytes:
    data = find_part(container, name)
    if data is None:
        raise PartNotFoundError(name)
    return data

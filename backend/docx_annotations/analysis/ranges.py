"""
Rastreamento de intervalos de texto sobrepostos.

O Word permite que intervalos anotados (ex.: comentarios) se sobreponham de
forma arbitraria, entao um mesmo trecho pode pertencer a varios intervalos.
O texto lido fica pendente e so e distribuido para todos os intervalos abertos
quando algum intervalo abre ou fecha.
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class RangeOverlapTracker:
    def __init__(self):
        # id do intervalo -> texto acumulado
        self.open_ranges: Dict[int, List[str]] = {}
        self.pending_text: List[str] = []

    @property
    def has_open(self) -> bool:
        return bool(self.open_ranges)

    def add_text(self, fragment: str):
        self.pending_text.append(fragment)

    def flush(self):
        """Anexa o texto pendente a todos os intervalos abertos e o descarta."""
        if not self.pending_text:
            return
        text = ''.join(self.pending_text)
        for buffer in self.open_ranges.values():
            buffer.append(text)
        self.pending_text = []

    def open(self, range_id: int):
        self.flush()
        if range_id in self.open_ranges:
            logger.debug("Intervalo %d reaberto; texto anterior descartado", range_id)
        self.open_ranges[range_id] = []

    def close(self, range_id: int) -> Optional[str]:
        """Fecha o intervalo e retorna seu texto, ou None se ele nao estava aberto."""
        self.flush()
        buffer = self.open_ranges.pop(range_id, None)
        if buffer is None:
            return None
        return ''.join(buffer)
